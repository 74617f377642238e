"""HTTP responses: the immutable ``Response`` and the handler-facing sink.

``Response`` is what the pipeline passes around and what the sender
writes to the transport. Each ``.with_*()`` call returns a new one.

``ResponseSink`` is the mutable object a handler receives as its second
argument. Chainable calls accumulate status, headers and cookies; the
first terminal call freezes them into a ``Response``::

    def handler(request, response):
        response.status(201).set_header("X-Id", "7").send({"id": 7})
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import Any

from mockingbird.errors import ConfigurationError, ResponseAlreadySent
from mockingbird.http.cookies import CookieSigner, SetCookie

HTML = "text/html; charset=utf-8"
TEXT = "text/plain; charset=utf-8"
JSON = "application/json; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

# Reason phrases used by send_status()
_REASONS: dict[int, str] = {
    200: "OK",
    201: "Created",
    202: "Accepted",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    304: "Not Modified",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    413: "Payload Too Large",
    415: "Unsupported Media Type",
    422: "Unprocessable Entity",
    429: "Too Many Requests",
    500: "Internal Server Error",
    502: "Bad Gateway",
    503: "Service Unavailable",
}


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str | None = HTML
    headers: tuple[tuple[str, str], ...] = ()
    cookies: tuple[SetCookie, ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_cookie(self, cookie: SetCookie) -> Response:
        """Return a new Response with an additional Set-Cookie."""
        return replace(self, cookies=(*self.cookies, cookie))

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        lower = name.lower()
        for key, value in self.headers:
            if key.lower() == lower:
                return value
        return None

    # -- Body access --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as text (UTF-8)."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)


def reason_phrase(status: int) -> str:
    return _REASONS.get(status, str(status))


class ResponseSink:
    """The write-once response object handed to handlers.

    ``status``, ``set_header``, ``cookie`` and ``clear_cookie`` return the
    sink so calls chain. ``send``, ``json``, ``end`` and ``send_status``
    are terminal: exactly one of them may run per request, and the
    pipeline reads the result from ``response`` afterwards.

    ``send`` picks the content type from the value unless one was set
    explicitly:

    - ``str``: ``text/html``
    - ``bytes``: ``application/octet-stream``
    - ``None``: empty body, no content type
    - anything else: serialized as JSON
    """

    __slots__ = ("_cookies", "_headers", "_response", "_route", "_signer", "_status")

    def __init__(self, *, route: str = "", signer: CookieSigner | None = None) -> None:
        self._route = route
        self._signer = signer
        self._status = 200
        self._headers: list[tuple[str, str]] = []
        self._cookies: list[SetCookie] = []
        self._response: Response | None = None

    @property
    def sent(self) -> bool:
        """True once a terminal method has run."""
        return self._response is not None

    @property
    def response(self) -> Response | None:
        """The frozen response, or ``None`` if nothing was sent."""
        return self._response

    # -- Chainable --

    def status(self, code: int) -> ResponseSink:
        self._check_open()
        self._status = int(code)
        return self

    def set_header(self, name: str, value: str) -> ResponseSink:
        """Set a header, replacing earlier values of the same name."""
        self._check_open()
        lower = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lower]
        self._headers.append((name, str(value)))
        return self

    def cookie(
        self,
        name: str,
        value: str,
        *,
        signed: bool = False,
        max_age: int | None = None,
        path: str = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = False,
        samesite: str | None = None,
    ) -> ResponseSink:
        """Queue a ``Set-Cookie``. With ``signed=True`` the value is signed.

        Raises:
            ConfigurationError: If ``signed=True`` and no cookie secret
                is configured.
        """
        self._check_open()
        value = str(value)
        if signed:
            if self._signer is None:
                msg = "Signed cookies require a cookie secret (ServerConfig.cookie_secret)."
                raise ConfigurationError(msg)
            value = self._signer.sign(value)
        self._cookies.append(
            SetCookie(
                name=name,
                value=value,
                max_age=max_age,
                path=path,
                domain=domain,
                secure=secure,
                httponly=httponly,
                samesite=samesite,
            )
        )
        return self

    def clear_cookie(self, name: str, *, path: str = "/") -> ResponseSink:
        """Queue a ``Set-Cookie`` that expires *name* immediately."""
        self._check_open()
        self._cookies.append(SetCookie(name=name, value="", max_age=0, path=path))
        return self

    # -- Terminal --

    def send(self, body: Any = None) -> None:
        if body is None:
            self._finish(b"", None)
        elif isinstance(body, str):
            self._finish(body, HTML)
        elif isinstance(body, (bytes, bytearray, memoryview)):
            self._finish(bytes(body), OCTET_STREAM)
        else:
            self.json(body)

    def json(self, value: Any) -> None:
        """Serialize *value* as JSON and finish the response."""
        self._check_open()
        self._finish(json_module.dumps(value), JSON)

    def end(self) -> None:
        """Finish the response with an empty body."""
        self._finish(b"", None)

    def send_status(self, code: int) -> None:
        """Set *code* and send its reason phrase as the body."""
        self.status(code)
        self._finish(reason_phrase(code), TEXT)

    # -- Internal --

    def _check_open(self) -> None:
        if self._response is not None:
            msg = f'Response for route "{self._route}" was already sent'
            raise ResponseAlreadySent(msg)

    def _finish(self, body: str | bytes, default_type: str | None) -> None:
        self._check_open()
        content_type = default_type
        headers: list[tuple[str, str]] = []
        for name, value in self._headers:
            if name.lower() == "content-type":
                content_type = value
            else:
                headers.append((name, value))
        self._response = Response(
            body=body,
            status=self._status,
            content_type=content_type,
            headers=tuple(headers),
            cookies=tuple(self._cookies),
        )
