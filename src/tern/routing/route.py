"""HTTPMethod enum and the frozen Route record."""

from dataclasses import dataclass
from enum import StrEnum

from tern.http.protocol import Handler


class HTTPMethod(StrEnum):
    """The HTTP methods a route can be registered for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered (method, path, handler) binding.

    Created at registration time and never mutated. Two routes are the
    same registration slot when their ``key`` is equal.
    """

    method: HTTPMethod
    path: str
    handler: Handler

    @property
    def key(self) -> tuple[str, str]:
        """The uniqueness key: ``(method, path)``."""
        return (self.method.value, self.path)
