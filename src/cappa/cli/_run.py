"""``cappa run``: serve an App given by import string."""

import argparse
import dataclasses
import importlib
import sys

from cappa.app import App


def load_app(target: str) -> App:
    """Import ``"module:name"`` (``name`` defaults to ``app``) and return the App.

    A callable that is not itself an App is called once, so a module can
    expose ``create_app`` instead of a ready instance.
    """
    module_name, _, name = target.partition(":")
    obj = getattr(importlib.import_module(module_name), name or "app")
    if callable(obj) and not isinstance(obj, App):
        obj = obj()
    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, expected a cappa App"
        raise TypeError(msg)
    return obj


def run_app(args: argparse.Namespace) -> None:
    """Load ``args.app`` and serve it; CLI flags override its config."""
    try:
        app = load_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.reload and not app.config.reload:
        app.config = dataclasses.replace(app.config, reload=True)

    app.serve(args.host, args.port, app_path=args.app)
