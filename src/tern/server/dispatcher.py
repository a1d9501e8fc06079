"""Request dispatcher — body buffering, route lookup, handler isolation.

``Dispatcher.create_entry_point()`` returns the coroutine a host server
calls once per request/response pair. Each call:

1. Buffers every body chunk until the transport signals end of body,
   then parses the payload once as JSON into ``request.body``.
2. Looks up ``(request.method, request.path)`` in the route table.
3. Invokes the matched handler, or answers 404.

Handler faults never escape the entry point: they are logged and turned
into a 500. On success the handler owns ending the response.
"""

import json
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any, TypeAlias

import anyio

from tern._internal.invoke import invoke
from tern.errors import BodyParseError, GatewayTimeout, NotFound, PayloadTooLarge
from tern.http.protocol import RequestLike, ResponseLike
from tern.routing.table import RouteTable
from tern.server.errors import finalize_handler_fault, finalize_http_error

logger = logging.getLogger("tern.server")

DEFAULT_MAX_BODY_SIZE = 16 * 1024 * 1024


class DispatchOutcome(StrEnum):
    """Terminal state of one entry-point invocation."""

    DISPATCHED = "dispatched"
    NOT_FOUND = "not_found"
    HANDLER_FAILED = "handler_failed"
    BAD_REQUEST = "bad_request"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    TIMED_OUT = "timed_out"


EntryPoint: TypeAlias = Callable[[RequestLike, ResponseLike], Awaitable[DispatchOutcome]]


async def read_body(request: RequestLike, *, max_size: int = DEFAULT_MAX_BODY_SIZE) -> Any:
    """Buffer the whole request body and parse it as JSON.

    Returns ``None`` for an empty body.

    Raises:
        PayloadTooLarge: Content-Length or the bytes received exceed
            *max_size*. A declared length over the limit is rejected
            before any chunk is read.
        BodyParseError: The payload is not valid UTF-8 JSON.
    """
    declared = request.content_length
    if declared is not None and declared > max_size:
        raise PayloadTooLarge(max_size)

    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_size:
            raise PayloadTooLarge(max_size)
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise BodyParseError(f"Malformed JSON body: {exc}") from exc


class Dispatcher:
    """Binds a route table to the per-request handling protocol.

    Usage::

        table = RouteTable().get("/users", list_users)
        entry_point = Dispatcher(table).create_entry_point()
        outcome = await entry_point(request, response)

    The table is read, never written; freeze it before serving so that
    concurrent requests can share it without locking.
    """

    __slots__ = ("debug", "max_body_size", "table", "timeout")

    def __init__(
        self,
        table: RouteTable,
        *,
        max_body_size: int = DEFAULT_MAX_BODY_SIZE,
        timeout: float | None = None,
        debug: bool = False,
    ) -> None:
        self.table = table
        self.max_body_size = max_body_size
        self.timeout = timeout
        self.debug = debug

    def create_entry_point(self) -> EntryPoint:
        """Return the request-handling coroutine bound to this table."""

        async def entry_point(request: RequestLike, response: ResponseLike) -> DispatchOutcome:
            if self.timeout is None:
                return await self._handle(request, response)
            try:
                with anyio.fail_after(self.timeout):
                    return await self._handle(request, response)
            except TimeoutError:
                logger.error(
                    "Timed out after %gs: %s %s", self.timeout, request.method, request.path
                )
                if response.ended:
                    # The handler already answered; its response stands.
                    return DispatchOutcome.DISPATCHED
                finalize_http_error(GatewayTimeout(self.timeout), request, response)
                return DispatchOutcome.TIMED_OUT

        return entry_point

    async def _handle(self, request: RequestLike, response: ResponseLike) -> DispatchOutcome:
        try:
            request.body = await read_body(request, max_size=self.max_body_size)
        except BodyParseError as exc:
            finalize_http_error(exc, request, response)
            return DispatchOutcome.BAD_REQUEST
        except PayloadTooLarge as exc:
            finalize_http_error(exc, request, response)
            return DispatchOutcome.PAYLOAD_TOO_LARGE

        route = self.table.lookup(request.method, request.path)
        if route is None:
            finalize_http_error(
                NotFound(f"No route matches {request.method} {request.path!r}"),
                request,
                response,
            )
            return DispatchOutcome.NOT_FOUND

        try:
            await invoke(route.handler, request, response)
        except Exception as exc:
            finalize_handler_fault(exc, request, response, debug=self.debug)
            return DispatchOutcome.HANDLER_FAILED

        return DispatchOutcome.DISPATCHED
