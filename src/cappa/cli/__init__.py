"""Cappa CLI: serve an app or a directory.

Entry point registered as ``cappa`` in ``pyproject.toml``::

    [project.scripts]
    cappa = "cappa.cli:main"
"""

import argparse
import logging
import sys

LOG_LEVELS = ("debug", "info", "warning", "error")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``cappa`` command."""
    parser = argparse.ArgumentParser(
        prog="cappa",
        description="Cappa: exact-match endpoints and static directories over ASGI.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- cappa run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app from an import string")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    _add_server_arguments(run_parser)
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart when source files change",
    )

    # -- cappa serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a directory of static files")
    serve_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to mount (default: current directory)",
    )
    serve_parser.add_argument("--route", default="/", help="Route prefix for the directory")
    serve_parser.add_argument(
        "--hidden",
        action="store_true",
        help="Also serve dotfiles",
    )
    _add_server_arguments(serve_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(args.log_level)

    if args.command == "run":
        from cappa.cli._run import run_app

        run_app(args)
    elif args.command == "serve":
        from cappa.cli._serve import serve_directory

        serve_directory(args)


def _add_server_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging verbosity (default: info)",
    )


def configure_logging(level: str) -> None:
    """Send cappa's log records to stderr at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        stream=sys.stderr,
    )
