"""Request and response capability protocols.

The dispatcher only needs a handful of capabilities from each side, so
any transport whose objects have this shape can be plugged in. No base
class required. The dispatcher checks the shape, not the lineage.
"""

from collections.abc import AsyncIterator, Callable
from typing import Any, Protocol, TypeAlias


class RequestLike(Protocol):
    """What the dispatcher reads from (and writes to) a request."""

    method: str
    path: str
    content_length: int | None
    body: Any

    def stream(self) -> AsyncIterator[bytes]:
        """Yield raw body chunks until the transport signals end of body."""
        ...


class ResponseLike(Protocol):
    """What the dispatcher writes to a response."""

    status: int

    @property
    def ended(self) -> bool: ...

    def clear(self) -> None:
        """Drop buffered headers and body written so far."""
        ...

    def end(self, data: str | bytes | None = None) -> None:
        """Finalize the response. Valid once per request."""
        ...


# Route handler — ``def`` or ``async def`` taking (request, response).
# The handler owns ending the response on the success path.
Handler: TypeAlias = Callable[[Any, Any], Any]
