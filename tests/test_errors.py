"""Tests for mockingbird.errors: hierarchy and messages."""

from pathlib import Path

from mockingbird.errors import (
    BadRequest,
    ClientDisconnect,
    ConfigurationError,
    HTTPError,
    InvalidHandlerError,
    MockingbirdError,
    NotFound,
    PayloadTooLarge,
    RouteConflictError,
    UnsupportedMediaType,
)


class TestHierarchy:
    def test_startup_errors_are_configuration_errors(self) -> None:
        assert issubclass(InvalidHandlerError, ConfigurationError)
        assert issubclass(RouteConflictError, ConfigurationError)

    def test_http_errors(self) -> None:
        for cls in (BadRequest, NotFound, PayloadTooLarge, UnsupportedMediaType):
            assert issubclass(cls, HTTPError)

    def test_disconnect_is_not_http_error(self) -> None:
        assert issubclass(ClientDisconnect, MockingbirdError)
        assert not issubclass(ClientDisconnect, HTTPError)


class TestMessages:
    def test_invalid_handler(self) -> None:
        err = InvalidHandlerError("GET /", "must export a function")
        assert str(err) == 'Handler file for route "GET /" must export a function'
        assert err.route == "GET /"

    def test_invalid_handler_with_source(self) -> None:
        err = InvalidHandlerError("GET /", "must export a function", Path("/m/get.py"))
        assert str(err).endswith("(/m/get.py)")

    def test_route_conflict_names_both_sources(self) -> None:
        err = RouteConflictError("GET /users/{b}", Path("/m/a/get.py"), Path("/m/b/get.py"))
        assert "/m/a/get.py" in str(err)
        assert "/m/b/get.py" in str(err)

    def test_http_error_str(self) -> None:
        assert str(HTTPError(status=400, detail="Bad body")) == "400: Bad body"
        assert str(NotFound()) == "404"

    def test_status_codes(self) -> None:
        assert BadRequest().status == 400
        assert PayloadTooLarge(10).status == 413
        assert PayloadTooLarge(10).detail == "Request body exceeds 10 bytes"
        assert UnsupportedMediaType("x").status == 415
