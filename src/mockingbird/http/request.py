"""Immutable HTTP request.

Frozen metadata plus the decoded body. Pipeline stages never mutate a
request; they derive a new one with ``with_cookies``, ``with_body`` or
``with_params`` and pass it on.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from mockingbird._internal.asgi import BodyChannel, Scope
from mockingbird.http.headers import Headers, parse_content_type
from mockingbird.http.query import QueryParams
from mockingbird.routing.segments import split_path, split_raw_path


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request as handlers see it.

    ``cookies``, ``signed_cookies`` and ``body`` are filled in by the
    cookie and body stages; ``params`` by the dispatcher. Until the body
    stage runs, ``body`` is ``None``. Afterwards it is ``{}`` for an
    empty body, otherwise whatever the content type decodes to.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    params: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)
    signed_cookies: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    raw_body: bytes = b""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    raw_path: bytes | None = None

    # Private: ASGI receive channel shared by every derived request
    _channel: BodyChannel | None = field(default=None, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def media_type(self) -> str:
        """The lower-cased media type without parameters (``""`` if absent)."""
        return parse_content_type(self.content_type)[0]

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def url(self) -> str:
        """Full request URL (path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def path_parts(self) -> list[str]:
        """Decoded path segments used for route matching.

        Split from ``raw_path`` when the server provides it, so an encoded
        slash stays inside its segment.
        """
        if self.raw_path is not None:
            return split_raw_path(self.raw_path)
        return split_path(self.path)

    @property
    def is_disconnected(self) -> bool:
        """True once the transport has reported a client disconnect."""
        return self._channel is not None and self._channel.disconnected

    # -- Transport access --

    async def read_body(self, limit: int) -> bytes:
        """Read the raw body from the transport (at most *limit* bytes)."""
        if self._channel is None:
            return self.raw_body
        return await self._channel.read(limit)

    async def wait(self, seconds: float) -> None:
        """Sleep, raising ``ClientDisconnect`` if the client goes away."""
        if self._channel is None:
            await asyncio.sleep(seconds)
            return
        await self._channel.wait(seconds)

    # -- Derivation --

    def with_cookies(self, cookies: Mapping[str, str], signed: Mapping[str, str]) -> Request:
        return replace(self, cookies=cookies, signed_cookies=signed)

    def with_body(self, body: Any, raw: bytes) -> Request:
        return replace(self, body=body, raw_body=raw)

    def with_params(self, params: Mapping[str, str]) -> Request:
        return replace(self, params=params)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, channel: BodyChannel | None = None) -> Request:
        """Create a Request from an ASGI scope and its body channel."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            raw_path=scope.get("raw_path"),
            _channel=channel,
        )
