"""Mutable HTTP response sink.

Handlers and the dispatcher write status, headers, and body into the
response, then call ``end()`` exactly once. The app flushes the ended
response to the ASGI server after dispatch returns.
"""

from __future__ import annotations

import json as json_module
import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("tern.server")


def _encode(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


@dataclass(slots=True)
class Response:
    """A writable HTTP response.

    ``status`` defaults to 200 and may be assigned directly. Body data is
    buffered by ``write()`` and ``end()``. Only the first ``end()`` counts;
    later writes are logged and dropped.
    """

    status: int = 200
    headers: list[tuple[str, str]] = field(default_factory=list)
    _chunks: list[bytes] = field(default_factory=list, init=False, repr=False)
    _ended: bool = field(default=False, init=False)

    # -- Writing --

    def set_header(self, name: str, value: str) -> None:
        """Set *name*, replacing any earlier value (case-insensitive)."""
        lower = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != lower]
        self.headers.append((name, value))

    def get_header(self, name: str) -> str | None:
        lower = name.lower()
        for n, v in self.headers:
            if n.lower() == lower:
                return v
        return None

    def write(self, data: str | bytes) -> None:
        """Append *data* to the body (str is UTF-8 encoded)."""
        if self._ended:
            logger.warning("Response.write() after end(); %d bytes dropped", len(data))
            return
        self._chunks.append(_encode(data))

    def clear(self) -> None:
        """Drop headers and body written so far; status is left as is."""
        if self._ended:
            logger.warning("Response.clear() after end(); ignoring")
            return
        self.headers.clear()
        self._chunks.clear()

    def end(self, data: str | bytes | None = None) -> None:
        """Finalize the response, optionally writing a last chunk."""
        if self._ended:
            logger.warning("Response.end() called more than once; ignoring")
            return
        if data:
            self._chunks.append(_encode(data))
        self._ended = True

    def send_json(self, obj: Any, *, status: int | None = None) -> None:
        """Serialize *obj* as JSON and end the response."""
        if status is not None:
            self.status = status
        self.set_header("Content-Type", "application/json; charset=utf-8")
        self.end(json_module.dumps(obj, separators=(",", ":"), ensure_ascii=False))

    # -- Inspection --

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def body_bytes(self) -> bytes:
        """Everything written so far."""
        return b"".join(self._chunks)
