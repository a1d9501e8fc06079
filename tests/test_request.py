"""Tests for tern.http.request — Request built from ASGI with chunked body stream."""

from tern.http.request import Request, request_target


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        scope = _make_scope(method="POST", path="/users", raw_path=b"/users")
        req = Request.from_asgi(scope, _make_receive())

        assert req.method == "POST"
        assert req.path == "/users"

    def test_body_starts_empty(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"{}"))
        assert req.body is None

    def test_body_is_assignable(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        req.body = {"a": 1}
        assert req.body == {"a": 1}

    def test_content_length(self) -> None:
        scope = _make_scope(headers=[(b"Content-Length", b"42")])
        assert Request.from_asgi(scope, _make_receive()).content_length == 42

    def test_content_length_invalid(self) -> None:
        scope = _make_scope(headers=[(b"content-length", b"abc")])
        assert Request.from_asgi(scope, _make_receive()).content_length is None

    def test_content_length_missing(self) -> None:
        assert Request.from_asgi(_make_scope(), _make_receive()).content_length is None


class TestRequestTarget:
    def test_query_string_kept(self) -> None:
        scope = _make_scope(path="/search", raw_path=b"/search", query_string=b"q=tern")
        assert request_target(scope) == "/search?q=tern"

    def test_raw_path_preferred_over_decoded_path(self) -> None:
        scope = _make_scope(path="/café", raw_path=b"/caf%C3%A9")
        assert request_target(scope) == "/caf%C3%A9"

    def test_falls_back_to_path_without_raw_path(self) -> None:
        scope = _make_scope(path="/users")
        del scope["raw_path"]
        assert request_target(scope) == "/users"

    def test_from_asgi_uses_full_target(self) -> None:
        scope = _make_scope(path="/users", raw_path=b"/users", query_string=b"page=2")
        assert Request.from_asgi(scope, _make_receive()).path == "/users?page=2"


class TestRequestStream:
    async def test_single_chunk(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello"))
        assert [chunk async for chunk in req.stream()] == [b"hello"]

    async def test_multiple_chunks_until_more_body_false(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"a", b"b", b"c"))
        assert [chunk async for chunk in req.stream()] == [b"a", b"b", b"c"]

    async def test_empty_chunks_skipped(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"", b"x", b""))
        assert [chunk async for chunk in req.stream()] == [b"x"]

    async def test_disconnect_stops_stream(self) -> None:
        messages = [
            {"type": "http.request", "body": b"part", "more_body": True},
            {"type": "http.disconnect"},
        ]

        async def receive():
            return messages.pop(0)

        req = Request.from_asgi(_make_scope(), receive)
        assert [chunk async for chunk in req.stream()] == [b"part"]

    async def test_no_receive_yields_nothing(self) -> None:
        req = Request(method="GET", path="/")
        assert [chunk async for chunk in req.stream()] == []
