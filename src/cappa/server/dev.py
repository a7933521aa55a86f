"""Server launcher.

Starts a pounce ASGI server with the live cappa App object.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cappa.errors import ConfigurationError

if TYPE_CHECKING:
    from cappa.app import App


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    reload_dirs: tuple[str, ...] = (),
    app_path: str | None = None,
) -> None:
    """Start a pounce server with the given cappa App.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but cappa has a live ``App`` object. We use ``pounce.Server``
    directly with the ASGI callable.

    Args:
        app: ASGI callable (cappa App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Restart on file changes (development).
        reload_dirs: Extra directories to watch alongside cwd.
        app_path: Optional ``"module:attribute"`` import string.  When
            provided, pounce reimports the app on each reload cycle.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "cappa needs the 'pounce' ASGI server to serve requests. "
            "Install it with: pip install bengal-pounce"
        )
        raise ConfigurationError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        reload_dirs=reload_dirs,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
