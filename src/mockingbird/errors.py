"""Mockingbird exception hierarchy.

Shared across the route compiler, middleware, and request pipeline so
every module raises and catches the same types.

Startup errors derive from ``ConfigurationError`` and abort the server
before it accepts a request. Per-request errors (``HTTPError`` and
friends) are converted into responses by the pipeline.
"""

from dataclasses import dataclass
from pathlib import Path


class MockingbirdError(Exception):
    """Base for all mockingbird-specific errors."""


class ConfigurationError(MockingbirdError):
    """Raised when the server configuration or the mock tree is invalid.

    Always raised while compiling the route table, never while serving.
    """


class InvalidHandlerError(ConfigurationError):
    """A handler file cannot be turned into a ``(request, response)`` callable.

    The message names the route so the mock tree can be fixed without
    a debugger::

        Handler file for route "GET /users" must export a function
    """

    def __init__(self, route: str, problem: str, source: Path | None = None) -> None:
        self.route = route
        self.source = source
        message = f'Handler file for route "{route}" {problem}'
        if source is not None:
            message = f"{message} ({source})"
        super().__init__(message)


class RouteConflictError(ConfigurationError):
    """Two handlers compile to the same method and path shape."""

    def __init__(self, route: str, first: Path | None, second: Path | None) -> None:
        self.route = route
        super().__init__(
            f'Conflicting handlers for route "{route}": '
            f"{first or '<builtin>'} and {second or '<builtin>'}"
        )


@dataclass(frozen=True, slots=True)
class HTTPError(MockingbirdError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or the dispatcher. The pipeline catches these
    at each stage boundary and answers with ``status`` and ``detail``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: the body does not match its declared content type."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the method and path.

    The body is empty: a miss is a designed outcome, not a failure.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__(status=404, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413: the request body exceeds ``max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")


class UnsupportedMediaType(HTTPError):  # noqa: N818
    """415: the declared charset cannot decode the body."""

    def __init__(self, detail: str) -> None:
        super().__init__(status=415, detail=detail)


class HandlerError(MockingbirdError):
    """A handler returned without writing a terminal response."""


class ResponseAlreadySent(MockingbirdError):  # noqa: N818
    """A handler tried to write a second terminal response."""


class ClientDisconnect(MockingbirdError):  # noqa: N818
    """The transport aborted the request before the pipeline finished.

    Not an HTTP error: nothing is sent back once this is raised.
    """
