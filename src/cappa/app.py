"""Cappa application class.

Mutable during setup (endpoints, extension handlers, mounts, error handlers).
Frozen at runtime when app.serve() or __call__() is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from cappa._internal.asgi import Receive, Scope, Send
from cappa._internal.types import ErrorHandler, Handler, HandlerFactory
from cappa.config import AppConfig
from cappa.routing.table import EndpointTable, ExtensionTable
from cappa.server.handler import handle_request
from cappa.static.mount import Mount, build_handler, resolve_root

logger = logging.getLogger("cappa.app")


class App:
    """The cappa application.

    Usage::

        app = App(AppConfig(port=8080))
        app.register_endpoint("/", lambda: "Hello world!")
        app.register_extension(".md", render_markdown)
        app.mount_directory("public")
        app.serve()

    Endpoints and mounts are applied in registration order when the app
    freezes, so a later registration for the same route wins (with a
    warning) whichever way it was registered.

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock and
        double-check so exactly one thread builds the tables, even when
        several ASGI workers call ``__call__()`` on their first request.
        After that the tables are only read.
    """

    __slots__ = (
        "_endpoints",
        "_error_handlers",
        "_extensions",
        "_freeze_lock",
        "_frozen",
        "_mounts",
        "_pending",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        # Endpoints as (route, handler) pairs and mounts, in registration order
        self._pending: list[tuple[str, Handler] | Mount] = []
        self._extensions = ExtensionTable()
        self._endpoints = EndpointTable()
        self._mounts: tuple[Mount, ...] = ()
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

    @property
    def port(self) -> int:
        return self.config.port

    # -- Endpoint registration --

    def register_endpoint(self, path: str, handler: Handler) -> None:
        """Bind *handler* to the exact route *path*.

        The route is normalized (leading slash, no trailing slash), so
        ``"docs/"`` and ``"/docs"`` name the same endpoint. Handlers may be
        sync or async and may take the request as their only argument.
        """
        self._check_not_frozen()
        self._pending.append((path, handler))

    def route(self, path: str) -> Callable[[Handler], Handler]:
        """Register an endpoint via decorator."""

        def decorator(func: Handler) -> Handler:
            self.register_endpoint(path, func)
            return func

        return decorator

    # -- Extension handlers --

    def register_extension(self, extension: str, factory: HandlerFactory) -> None:
        """Use *factory* for files with *extension* instead of plain file serving.

        *factory* is called with the file's path and returns the handler for
        it. It applies to mounted files and, at request time, to unmatched
        paths with this extension that name a file inside a mount.
        """
        self._check_not_frozen()
        self._extensions.add(extension, factory)

    def extension(self, extension: str) -> Callable[[HandlerFactory], HandlerFactory]:
        """Register an extension handler factory via decorator."""

        def decorator(func: HandlerFactory) -> HandlerFactory:
            self.register_extension(extension, func)
            return func

        return decorator

    # -- Directory mounting --

    def mount_directory(
        self,
        directory: str | Path,
        route: str = "/",
        *,
        index_name: str | None = None,
        include_hidden: bool = False,
        cache_control: str | None = None,
    ) -> None:
        """Serve every file under *directory* below *route*.

        The directory must exist now; it is walked when the app freezes.
        ``index.*`` files are served at their directory's route. Entries
        that resolve outside the directory (symlinks) are skipped.

        Args:
            directory: Directory to mount.
            route: Route prefix for the directory's files.
            index_name: Stem of files collapsed onto their directory route.
                Defaults to ``config.index_name``.
            include_hidden: Also serve dotfiles and dot-directories.
            cache_control: ``Cache-Control`` value for plain static files.
        """
        self._check_not_frozen()
        self._pending.append(
            Mount(
                root=resolve_root(directory),
                route=route,
                index_name=index_name or self.config.index_name,
                include_hidden=include_hidden,
                cache_control=cache_control,
            )
        )

    # -- Error handlers --

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def endpoints(self) -> list[str]:
        """Every served route in registration order. Freezes the app."""
        self._ensure_frozen()
        return self._endpoints.routes

    # -- Server --

    def serve(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Freeze the app, log the endpoint table, and start serving.

        Args:
            host: Override bind host.
            port: Override bind port.
            app_path: ``"module:attribute"`` import string, used by the
                server to reimport the app when reloading.
        """
        self._ensure_frozen()

        _host = host or self.config.host
        _port = port if port is not None else self.config.port

        logger.info("Cappa listening on http://%s:%d", _host, _port)
        for route in self._endpoints.routes:
            logger.info("Registered endpoint: %s", route)

        from cappa.server.dev import run_server

        run_server(
            self,
            _host,
            _port,
            workers=self.config.workers,
            reload=self.config.reload,
            reload_dirs=self.config.reload_dirs,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            endpoints=self._endpoints,
            extensions=self._extensions,
            mounts=self._mounts,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs startup/shutdown hooks and signals completion to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self._run_hooks(self._startup_hooks)
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self._run_hooks(self._shutdown_hooks)
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def _run_hooks(self, hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the endpoint table from pending registrations.

        Nothing is installed or frozen until every mount walk and extension
        factory has succeeded.

        MUST only be called while holding _freeze_lock.
        """
        endpoints = EndpointTable()
        mounts: list[Mount] = []
        for pending in self._pending:
            if isinstance(pending, Mount):
                mounts.append(pending)
                for mounted in pending.files():
                    handler = build_handler(
                        mounted, self._extensions, cache_control=pending.cache_control
                    )
                    endpoints.add(mounted.route, handler)
            else:
                path, handler = pending
                endpoints.add(path, handler)

        endpoints.freeze()
        self._extensions.freeze()
        self._endpoints = endpoints
        self._mounts = tuple(mounts)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register endpoints, extensions, and mounts before calling app.serve()."
            )
            raise RuntimeError(msg)
