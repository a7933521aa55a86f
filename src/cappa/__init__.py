"""Cappa: a tiny ASGI helper for exact-match endpoints and static directories.

Basic usage::

    from cappa import App

    app = App()

    @app.route("/")
    def index():
        return "Hello world!"

    app.mount_directory("public", "/static")
    app.serve()

Custom handling for a file type::

    @app.extension(".md")
    def markdown(path):
        async def handler(request):
            return render(path.read_text())
        return handler
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "CappaError",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "Redirect",
    "Request",
    "Response",
    "StaticFile",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cappa`` fast while providing a clean top-level API.
    """
    if name == "App":
        from cappa.app import App

        return App

    if name == "AppConfig":
        from cappa.config import AppConfig

        return AppConfig

    if name == "Request":
        from cappa.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from cappa.http import response as _resp

        return getattr(_resp, name)

    if name == "StaticFile":
        from cappa.static.files import StaticFile

        return StaticFile

    if name in ("CappaError", "ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound"):
        from cappa import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
