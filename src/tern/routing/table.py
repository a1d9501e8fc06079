"""Route table with exact (method, path) lookup.

Registration is rejected outright on a duplicate key: no overwrite,
no fan-out to multiple handlers. Lookup compares both fields exactly,
case-sensitively, with no trailing-slash folding or query stripping.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from tern.errors import ConfigurationError, RouteConflict
from tern.http.protocol import Handler
from tern.routing.route import HTTPMethod, Route

logger = logging.getLogger("tern.routing")


class RouteTable:
    """Insertion-ordered routes with a dict index for O(1) lookup.

    Usage::

        table = RouteTable()
        table.get("/users", list_users).post("/users", create_user)
        route = table.lookup("GET", "/users")

    Thread safety:
        Registration happens once during setup. After ``freeze()`` the
        table is read-only, so concurrent lookups need no locking.
    """

    __slots__ = ("_frozen", "_index", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._index: dict[tuple[str, str], Route] = {}
        self._frozen = False

    # -- Registration --

    def register(self, method: str, path: str, handler: Handler) -> RouteTable:
        """Register *handler* for *method* and *path*.

        Returns the table so registrations can be chained.

        Raises:
            RouteConflict: A route for ``(method, path)`` already exists.
            ConfigurationError: The method is unsupported or the table
                is frozen.
        """
        if self._frozen:
            msg = (
                f"Cannot register {method} {path!r}: the route table is frozen. "
                "Register routes before the app starts serving requests."
            )
            raise ConfigurationError(msg)

        try:
            verb = HTTPMethod(method)
        except ValueError:
            supported = ", ".join(m.value for m in HTTPMethod)
            msg = f"Unsupported HTTP method {method!r}. Supported methods: {supported}"
            raise ConfigurationError(msg) from None

        route = Route(method=verb, path=path, handler=handler)
        if route.key in self._index:
            raise RouteConflict(verb.value, path)

        self._routes.append(route)
        self._index[route.key] = route
        logger.debug("Registered %s %s -> %s", verb.value, path, _handler_name(handler))
        return self

    def get(self, path: str, handler: Handler) -> RouteTable:
        """Register a GET route."""
        return self.register(HTTPMethod.GET, path, handler)

    def post(self, path: str, handler: Handler) -> RouteTable:
        """Register a POST route."""
        return self.register(HTTPMethod.POST, path, handler)

    def put(self, path: str, handler: Handler) -> RouteTable:
        """Register a PUT route."""
        return self.register(HTTPMethod.PUT, path, handler)

    def delete(self, path: str, handler: Handler) -> RouteTable:
        """Register a DELETE route."""
        return self.register(HTTPMethod.DELETE, path, handler)

    # -- Lookup --

    def lookup(self, method: str, path: str) -> Route | None:
        """Return the route registered for exactly *method* and *path*.

        ``None`` is the expected "not found" outcome, not an error.
        """
        return self._index.get((method, path))

    # -- Freeze --

    def freeze(self) -> None:
        """Make the table read-only. No more routes can be registered."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes in registration order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __repr__(self) -> str:
        return f"RouteTable({len(self._routes)} routes, frozen={self._frozen})"


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
