"""Invoke helpers — call sync or async handlers uniformly.

Tern handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler (route handlers, lifespan hooks) goes through
this helper so the sync/async check lives in exactly one place.

Usage::

    from tern._internal.invoke import invoke

    result = await invoke(handler, request, response)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync — runs to completion before invoke() returns
        def list_users(request, response):
            response.end(b"[]")

        # async — returns a coroutine, awaited automatically
        async def list_users(request, response):
            users = await fetch_users()
            response.end(json.dumps(users))
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
