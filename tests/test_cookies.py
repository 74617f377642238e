"""Tests for cookie parsing, serialization and signing."""

import pytest

from mockingbird.errors import ConfigurationError
from mockingbird.http.cookies import CookieSigner, SetCookie, parse_cookies


class TestParseCookies:
    def test_basic(self) -> None:
        assert parse_cookies("a=1; b=2") == {"a": "1", "b": "2"}

    def test_empty(self) -> None:
        assert parse_cookies("") == {}

    def test_quoted_value(self) -> None:
        assert parse_cookies('token="abc"') == {"token": "abc"}

    def test_percent_decoded(self) -> None:
        assert parse_cookies("greeting=hello%20world") == {"greeting": "hello world"}

    def test_pair_without_equals_skipped(self) -> None:
        assert parse_cookies("flag; a=1") == {"a": "1"}


class TestSetCookie:
    def test_minimal(self) -> None:
        assert SetCookie("cookie", "test").to_header_value() == "cookie=test; Path=/"

    def test_all_attributes(self) -> None:
        cookie = SetCookie(
            "session",
            "abc",
            max_age=60,
            domain="example.com",
            secure=True,
            httponly=True,
            samesite="Lax",
        )
        assert cookie.to_header_value() == (
            "session=abc; Max-Age=60; Path=/; Domain=example.com; Secure; HttpOnly; SameSite=Lax"
        )

    def test_unsafe_characters_encoded(self) -> None:
        assert SetCookie("a", "x y;z").to_header_value() == "a=x%20y%3Bz; Path=/"

    def test_round_trip_through_parse(self) -> None:
        header = SetCookie("a", "x y;z").to_header_value()
        pair = header.split("; ")[0]
        assert parse_cookies(pair) == {"a": "x y;z"}


class TestCookieSigner:
    def test_sign_and_unsign(self) -> None:
        signer = CookieSigner("s3cret")
        raw = signer.sign("alice")
        assert raw.startswith("s:alice.")
        assert signer.unsign(raw) == "alice"

    def test_tampered_value_rejected(self) -> None:
        signer = CookieSigner("s3cret")
        raw = signer.sign("alice").replace("alice", "mallory")
        assert signer.unsign(raw) is None

    def test_other_secret_rejected(self) -> None:
        raw = CookieSigner("one").sign("alice")
        assert CookieSigner("two").unsign(raw) is None

    def test_unprefixed_value_rejected(self) -> None:
        assert CookieSigner("s3cret").unsign("alice") is None

    def test_split(self) -> None:
        signer = CookieSigner("s3cret")
        cookies = {
            "theme": "dark",
            "user": signer.sign("alice"),
            "forged": "s:bob.not-a-signature",
        }
        plain, signed = signer.split(cookies)
        assert plain == {"theme": "dark"}
        assert signed == {"user": "alice"}

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="must not be empty"):
            CookieSigner("")
