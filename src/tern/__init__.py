"""Tern — a minimal exact-match HTTP request dispatcher for ASGI.

Register handlers against a method and an exact path; every request is
either handed to its handler or answered with 404 (no match) or 500
(handler fault).

Basic usage::

    from tern import App

    app = App()

    @app.post("/users")
    def create_user(request, response):
        response.send_json({"created": request.body["name"]}, status=201)

Serve ``app`` with any ASGI 3.0 server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DispatchOutcome",
    "Dispatcher",
    "HTTPError",
    "HTTPMethod",
    "NotFound",
    "Request",
    "Response",
    "Route",
    "RouteConflict",
    "RouteTable",
    "TernError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tern`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tern.app import App

        return App

    if name == "AppConfig":
        from tern.config import AppConfig

        return AppConfig

    if name in ("Dispatcher", "DispatchOutcome"):
        from tern.server import dispatcher

        return getattr(dispatcher, name)

    if name in ("Request", "Response"):
        from tern import http

        return getattr(http, name)

    if name in ("HTTPMethod", "Route", "RouteTable"):
        from tern import routing

        return getattr(routing, name)

    if name in ("ConfigurationError", "HTTPError", "NotFound", "RouteConflict", "TernError"):
        from tern import errors

        return getattr(errors, name)

    msg = f"module 'tern' has no attribute {name!r}"
    raise AttributeError(msg)
