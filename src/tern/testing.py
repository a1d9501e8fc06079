"""Async test client for tern applications.

Sends requests through the ASGI interface directly — no sockets, no
HTTP parsing. Uses the same dispatch path as production.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from tern._internal.invoke import invoke
from tern.app import App


@dataclass(frozen=True, slots=True)
class TestResponse:
    """What the app sent back for one request."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: tuple[tuple[str, str], ...]
    body: bytes

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or None."""
        lower = name.lower()
        for key, value in self.headers:
            if key == lower:
                return value
        return None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json_module.loads(self.body)


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for tern applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.post("/users", json={"name": "Ada"})
            assert response.status == 201

    Entering the context freezes the app and runs its startup hooks;
    leaving it runs the shutdown hooks.
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        for hook in self.app._startup_hooks:
            await invoke(hook)
        return self

    async def __aexit__(self, *args: object) -> None:
        for hook in self.app._shutdown_hooks:
            await invoke(hook)

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> TestResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> TestResponse:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
        chunk_size: int | None = None,
    ) -> TestResponse:
        """Send an arbitrary request through the ASGI interface.

        Args:
            method: HTTP method.
            path: Request path, optionally with ``?query``.
            headers: Extra request headers.
            body: Raw request body.
            json: Object to serialize as the JSON body (overrides *body*).
            chunk_size: Deliver the body in ``http.request`` messages of at
                most this many bytes, to exercise multi-chunk bodies.
        """
        extra_headers: dict[str, str] = {}
        request_body = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"
        if request_body:
            extra_headers["content-length"] = str(len(request_body))
        merged = {**extra_headers, **(headers or {})}

        query_string = b""
        if "?" in path:
            path, qs = path.split("?", 1)
            query_string = qs.encode("latin-1")

        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method,
            "path": unquote(path),
            "raw_path": path.encode("latin-1"),
            "query_string": query_string,
            "root_path": "",
            "headers": [
                (k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in merged.items()
            ],
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 12345),
        }

        messages = _body_messages(request_body, chunk_size)

        async def receive() -> dict[str, Any]:
            if messages:
                return messages.pop(0)
            return {"type": "http.disconnect"}

        sent: list[dict[str, Any]] = []

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await self.app(scope, receive, send)
        return _build_response(sent)


def _body_messages(body: bytes, chunk_size: int | None) -> list[dict[str, Any]]:
    if not body or chunk_size is None or chunk_size >= len(body):
        return [{"type": "http.request", "body": body, "more_body": False}]
    pieces = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)]
    return [
        {"type": "http.request", "body": piece, "more_body": i < len(pieces) - 1}
        for i, piece in enumerate(pieces)
    ]


def _build_response(sent: list[dict[str, Any]]) -> TestResponse:
    status = 500
    headers: tuple[tuple[str, str], ...] = ()
    body_parts: list[bytes] = []
    for message in sent:
        if message["type"] == "http.response.start":
            status = message["status"]
            headers = tuple(
                (name.decode("latin-1").lower(), value.decode("latin-1"))
                for name, value in message.get("headers", [])
            )
        elif message["type"] == "http.response.body":
            body_parts.append(message.get("body", b""))
    return TestResponse(status=status, headers=headers, body=b"".join(body_parts))
