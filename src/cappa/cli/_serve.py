"""``cappa serve``: mount a directory and serve it."""

import argparse
import sys

from cappa.app import App
from cappa.config import AppConfig
from cappa.errors import ConfigurationError


def build_directory_app(args: argparse.Namespace) -> App:
    """An App with ``args.directory`` mounted at ``args.route``."""
    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port

    app = App(AppConfig(**overrides))
    app.mount_directory(args.directory, args.route, include_hidden=args.hidden)
    return app


def serve_directory(args: argparse.Namespace) -> None:
    try:
        app = build_directory_app(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    app.serve()
