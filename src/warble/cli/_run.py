"""``warble run`` — development server command."""

import argparse
import sys

from warble.app import App
from warble.errors import WarbleError


def run_server(args: argparse.Namespace) -> None:
    """Build an App from ``args.config`` and serve it with pounce.

    The app is frozen before the server starts so configuration and
    extension errors are reported here rather than on first request.
    """
    try:
        app = App(config_file=args.config)
        app._ensure_frozen()
    except WarbleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from warble.server.dev import run_dev_server

    run_dev_server(app, args.host, args.port, reload=args.reload)
