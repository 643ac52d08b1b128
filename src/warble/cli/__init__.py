"""Warble CLI — offline rendering and the dev server.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble — localized pages from composable fragments.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warble render ----------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one page to stdout")
    render_parser.add_argument("config", help="Configuration file (defines CONFIG)")
    render_parser.add_argument(
        "path", help="Request path, optionally with a query (e.g. /fr/apropos, /?lang=fr)"
    )
    render_parser.add_argument(
        "--accept-language",
        default=None,
        help="Accept-Language header value",
    )
    render_parser.add_argument(
        "--cookie",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Request cookie (repeatable)",
    )
    render_parser.add_argument(
        "--query",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Query parameter (repeatable)",
    )
    render_parser.add_argument("--host", default="localhost", help="Host header")
    render_parser.add_argument("--https", action="store_true", help="Treat the request as secure")

    # -- warble run -------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the development server")
    run_parser.add_argument("config", help="Configuration file (defines CONFIG)")
    run_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    run_parser.add_argument("--port", type=int, default=8000, help="Bind port number")
    run_parser.add_argument("--reload", action="store_true", help="Reload on file changes")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "render":
        from warble.cli._render import render_page

        render_page(args)
    elif args.command == "run":
        from warble.cli._run import run_server

        run_server(args)
