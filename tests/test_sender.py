"""Tests for tern.server.sender response emission rules."""

from tern.http.response import Response
from tern.server.sender import send_response


async def _send(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_start_then_body(self) -> None:
        resp = Response(status=201)
        resp.end("ok")

        messages = await _send(resp)

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 201
        assert messages[1] == {"type": "http.response.body", "body": b"ok"}

    async def test_content_length_and_default_content_type(self) -> None:
        resp = Response()
        resp.end("ok")

        headers = dict((await _send(resp))[0]["headers"])

        assert headers[b"content-length"] == b"2"
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"

    async def test_explicit_content_type_kept(self) -> None:
        resp = Response()
        resp.send_json([1])

        raw = (await _send(resp))[0]["headers"]

        content_types = [v for k, v in raw if k == b"content-type"]
        assert content_types == [b"application/json; charset=utf-8"]

    async def test_user_content_length_replaced(self) -> None:
        resp = Response(headers=[("Content-Length", "999")])
        resp.end("abc")

        raw = (await _send(resp))[0]["headers"]

        assert [v for k, v in raw if k == b"content-length"] == [b"3"]

    async def test_empty_body_has_no_content_type(self) -> None:
        resp = Response(status=404)
        resp.end()

        headers = dict((await _send(resp))[0]["headers"])

        assert b"content-type" not in headers
        assert headers[b"content-length"] == b"0"


class TestSendResponseNoBodyStatuses:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        # Even if a handler accidentally attaches body content, sender must
        # enforce RFC no-body semantics for 204.
        resp = Response(status=204)
        resp.end("unexpected-body")

        messages = await _send(resp)

        assert dict(messages[0]["headers"])[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_304_drops_body(self) -> None:
        resp = Response(status=304)
        resp.end("unexpected-body")

        messages = await _send(resp)

        assert messages[1]["body"] == b""
