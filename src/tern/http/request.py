"""HTTP request as handed to route handlers.

``path`` is the request target exactly as the client sent it: the raw,
undecoded path plus ``?query`` when there is one. Routes match against
that full string. ``body`` starts out as ``None`` and is filled in by the
dispatcher with the parsed JSON payload before the handler runs.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass, field
from typing import Any

from tern._internal.asgi import Receive, Scope


@dataclass(slots=True)
class Request:
    """An HTTP request.

    The dispatcher is the only component that assigns ``body``. Raw body
    chunks are read once through ``stream()``; the ASGI receive channel
    cannot be replayed.
    """

    method: str
    path: str

    # Declared Content-Length, if the client sent a valid one
    content_length: int | None = None

    # Parsed body, populated before dispatch
    body: Any = None

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield body chunks as the transport delivers them.

        Stops after the message with ``more_body=False`` or when the
        client disconnects.
        """
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            if message.get("type") == "http.disconnect":
                break
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        return cls(
            method=scope["method"],
            path=request_target(scope),
            content_length=_content_length(scope.get("headers", ())),
            _receive=receive,
        )


def request_target(scope: Scope) -> str:
    """Rebuild the request target from an ASGI scope.

    ``scope["path"]`` is percent-decoded and has no query, so prefer
    ``raw_path`` and re-attach ``query_string``.
    """
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope["path"]
    query_string = scope.get("query_string", b"")
    if query_string:
        return f"{path}?{query_string.decode('latin-1')}"
    return path


def _content_length(raw_headers: Iterable[tuple[bytes, bytes]]) -> int | None:
    for name, value in raw_headers:
        if name.lower() == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
