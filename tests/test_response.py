"""Tests for Response and the handler-facing ResponseSink."""

import pytest

from mockingbird.errors import ConfigurationError, ResponseAlreadySent
from mockingbird.http.cookies import CookieSigner
from mockingbird.http.response import JSON, OCTET_STREAM, Response, ResponseSink


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body_bytes == b""

    def test_with_methods_return_new_instances(self) -> None:
        original = Response("hi")
        changed = original.with_status(201).with_header("X-Id", "7")
        assert original.status == 200
        assert original.headers == ()
        assert changed.status == 201
        assert changed.header("x-id") == "7"

    def test_text_and_json(self) -> None:
        response = Response(body=b'{"a": 1}')
        assert response.text == '{"a": 1}'
        assert response.json() == {"a": 1}


class TestResponseSinkSend:
    def test_mapping_is_json(self) -> None:
        sink = ResponseSink()
        sink.send({"key": "value"})
        assert sink.sent
        assert sink.response.content_type == JSON
        assert sink.response.json() == {"key": "value"}

    def test_list_is_json(self) -> None:
        sink = ResponseSink()
        sink.send([1, 2])
        assert sink.response.json() == [1, 2]

    def test_str_is_html(self) -> None:
        sink = ResponseSink()
        sink.send("<p>hi</p>")
        assert sink.response.content_type.startswith("text/html")
        assert sink.response.text == "<p>hi</p>"

    def test_bytes_are_octet_stream(self) -> None:
        sink = ResponseSink()
        sink.send(b"\x00\x01")
        assert sink.response.content_type == OCTET_STREAM
        assert sink.response.body_bytes == b"\x00\x01"

    def test_none_is_empty(self) -> None:
        sink = ResponseSink()
        sink.send()
        assert sink.response.body_bytes == b""
        assert sink.response.content_type is None

    def test_explicit_content_type_wins(self) -> None:
        sink = ResponseSink()
        sink.set_header("Content-Type", "text/csv").send("a,b")
        assert sink.response.content_type == "text/csv"
        assert sink.response.headers == ()

    def test_status_and_headers_chain(self) -> None:
        sink = ResponseSink()
        sink.status(201).set_header("X-Id", "1").set_header("x-id", "2").json({"id": 2})
        assert sink.response.status == 201
        assert sink.response.headers == (("x-id", "2"),)

    def test_end(self) -> None:
        sink = ResponseSink()
        sink.status(204).end()
        assert sink.response.status == 204
        assert sink.response.body_bytes == b""

    def test_send_status(self) -> None:
        sink = ResponseSink()
        sink.send_status(404)
        assert sink.response.status == 404
        assert sink.response.text == "Not Found"

    def test_send_status_unknown_code(self) -> None:
        sink = ResponseSink()
        sink.send_status(599)
        assert sink.response.text == "599"

    def test_nothing_sent(self) -> None:
        sink = ResponseSink()
        assert not sink.sent
        assert sink.response is None


class TestResponseSinkWriteOnce:
    def test_second_send_rejected(self) -> None:
        sink = ResponseSink(route="GET /users")
        sink.send("first")
        with pytest.raises(ResponseAlreadySent, match='route "GET /users"'):
            sink.send("second")
        assert sink.response.text == "first"

    def test_chainable_after_send_rejected(self) -> None:
        sink = ResponseSink()
        sink.end()
        with pytest.raises(ResponseAlreadySent):
            sink.status(500)
        with pytest.raises(ResponseAlreadySent):
            sink.set_header("X-Late", "1")


class TestResponseSinkCookies:
    def test_plain_cookie(self) -> None:
        sink = ResponseSink()
        sink.cookie("cookie", "test").send()
        (cookie,) = sink.response.cookies
        assert cookie.to_header_value() == "cookie=test; Path=/"

    def test_clear_cookie(self) -> None:
        sink = ResponseSink()
        sink.clear_cookie("cookie").end()
        assert sink.response.cookies[0].to_header_value() == "cookie=; Max-Age=0; Path=/"

    def test_signed_cookie(self) -> None:
        signer = CookieSigner("s3cret")
        sink = ResponseSink(signer=signer)
        sink.cookie("user", "alice", signed=True).end()
        raw = sink.response.cookies[0].value
        assert raw.startswith("s:")
        assert signer.unsign(raw) == "alice"

    def test_signed_cookie_requires_secret(self) -> None:
        sink = ResponseSink()
        with pytest.raises(ConfigurationError, match="cookie secret"):
            sink.cookie("user", "alice", signed=True)
