"""Failure paths for the dispatcher.

Turns HTTPError exceptions and handler faults into a finalized response.
Uses only the ``ResponseLike`` capabilities (``status``, ``ended``,
``end()``), so any conforming transport works.
"""

import logging
import traceback

from tern.errors import HTTPError
from tern.http.protocol import RequestLike, ResponseLike

logger = logging.getLogger("tern.server")


def finalize_http_error(
    exc: HTTPError,
    request: RequestLike,
    response: ResponseLike,
) -> None:
    """Replace anything written so far with ``exc.status`` and ``exc.detail``, then end."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    if response.ended:
        logger.warning(
            "Cannot send %d for %s %s: response already ended",
            exc.status,
            request.method,
            request.path,
        )
        return

    response.clear()
    response.status = exc.status
    response.end(exc.detail or None)


def finalize_handler_fault(
    exc: Exception,
    request: RequestLike,
    response: ResponseLike,
    *,
    debug: bool = False,
) -> None:
    """Log a handler failure and answer 500.

    If the handler ended the response before raising, the status line is
    already committed; the fault is logged and the response left alone.
    Otherwise any partial headers and body the handler wrote are discarded.
    """
    logger.error("500 %s %s", request.method, request.path, exc_info=exc)

    if response.ended:
        logger.warning(
            "Handler for %s %s raised after ending the response; status %d kept",
            request.method,
            request.path,
            response.status,
        )
        return

    response.clear()
    response.status = 500
    if debug:
        response.end("".join(traceback.format_exception(exc)))
    else:
        response.end("Internal Server Error")
