"""``warble render`` — render a single page without a server."""

import argparse
import sys
from urllib.parse import urlencode

from warble.app import App
from warble.errors import WarbleError


def _pairs(values: list[str], flag: str) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep or not name:
            print(f"Error: {flag} expects NAME=VALUE, got {item!r}", file=sys.stderr)
            raise SystemExit(2)
        pairs.append((name, value))
    return pairs


def render_page(args: argparse.Namespace) -> None:
    """Build an App from ``args.config`` and print the page for ``args.path``."""
    headers = {"host": args.host}
    if args.accept_language:
        headers["accept-language"] = args.accept_language
    cookies = _pairs(args.cookie, "--cookie")
    if cookies:
        headers["cookie"] = "; ".join(f"{name}={value}" for name, value in cookies)
    path, _, inline_query = args.path.partition("?")
    extra_query = urlencode(_pairs(args.query, "--query"))
    query_string = "&".join(part for part in (inline_query, extra_query) if part)

    try:
        app = App(config_file=args.config)
        body = app.render(
            path,
            headers=headers,
            query_string=query_string,
            scheme="https" if args.https else "http",
        )
    except WarbleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    sys.stdout.write(body)
