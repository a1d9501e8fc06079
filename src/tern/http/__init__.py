"""HTTP primitives — the request and response objects handlers receive."""

from tern.http.protocol import Handler, RequestLike, ResponseLike
from tern.http.request import Request
from tern.http.response import Response

__all__ = ["Handler", "Request", "RequestLike", "Response", "ResponseLike"]
