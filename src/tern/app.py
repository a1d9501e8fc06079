"""Tern application class.

Mutable during setup (route registration, lifespan hooks).
Frozen at runtime when the first lifespan or HTTP scope arrives.
"""

import logging
import threading
from collections.abc import Callable
from typing import Any

from tern._internal.asgi import Receive, Scope, Send
from tern._internal.invoke import invoke
from tern.config import AppConfig
from tern.http.protocol import Handler
from tern.http.request import Request
from tern.http.response import Response
from tern.routing.route import HTTPMethod
from tern.routing.table import RouteTable
from tern.server.dispatcher import Dispatcher, EntryPoint
from tern.server.sender import send_response

logger = logging.getLogger("tern.server")


class App:
    """The tern application: an ASGI 3.0 callable around a route table.

    Usage::

        app = App()

        @app.get("/users")
        def list_users(request, response):
            response.send_json([])

    Serve it with any ASGI server.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread builds the entry point, even when several ASGI workers
        call ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_entry_point",
        "_freeze_lock",
        "_frozen",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
        "routes",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        routes: RouteTable | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.routes: RouteTable = routes if routes is not None else RouteTable()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._entry_point: EntryPoint | None = None

    # -- Route registration --

    def route(self, method: str, path: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Raises ``RouteConflict`` if *method* and *path* are already taken.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self.routes.register(method, path, func)
            return func

        return decorator

    def get(self, path: str) -> Callable[[Handler], Handler]:
        """Register a GET handler via decorator."""
        return self.route(HTTPMethod.GET, path)

    def post(self, path: str) -> Callable[[Handler], Handler]:
        """Register a POST handler via decorator."""
        return self.route(HTTPMethod.POST, path)

    def put(self, path: str) -> Callable[[Handler], Handler]:
        """Register a PUT handler via decorator."""
        return self.route(HTTPMethod.PUT, path)

    def delete(self, path: str) -> Callable[[Handler], Handler]:
        """Register a DELETE handler via decorator."""
        return self.route(HTTPMethod.DELETE, path)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook (sync or async), run on ``lifespan.startup``."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook (sync or async), run on ``lifespan.shutdown``."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly and delegates HTTP scopes to the
        dispatcher. Other scope types (websocket) are not served.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            logger.debug("Ignoring unsupported ASGI scope type %r", scope["type"])
            return

        self._ensure_frozen()

        assert self._entry_point is not None

        request = Request.from_asgi(scope, receive)
        response = Response()
        await self._entry_point(request, response)

        if not response.ended:
            logger.warning(
                "Handler for %s %s returned without ending the response",
                request.method,
                request.path,
            )
            response.end()

        await send_response(response, send)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    for hook in self._shutdown_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freeze --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the runtime entry point and lock the route table.

        MUST only be called while holding _freeze_lock.
        """
        self.routes.freeze()
        dispatcher = Dispatcher(
            self.routes,
            max_body_size=self.config.max_content_length,
            timeout=self.config.request_timeout,
            debug=self.config.debug,
        )
        self._entry_point = dispatcher.create_entry_point()
        self._frozen = True
        logger.debug("App frozen with %d routes", len(self.routes))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and hooks before the server starts."
            )
            raise RuntimeError(msg)
