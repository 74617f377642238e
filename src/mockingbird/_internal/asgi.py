"""Raw ASGI types and the request body channel.

Internal only. Handlers see ``Request.body``; middleware goes through
``Request.read_body`` and ``Request.wait``.
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

from mockingbird.errors import ClientDisconnect, PayloadTooLarge

# Raw ASGI types (matching the ASGI 3 callable signature)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


class BodyChannel:
    """Owns the ASGI ``receive`` callable for one request.

    Every message is pulled through the channel, so body chunks are
    buffered and an ``http.disconnect`` is remembered no matter which
    stage was listening when it arrived. ``wait`` relies on this to stop
    a delayed request as soon as the client goes away.

    Past *max_size* bytes the channel discards what it receives, so a body
    that can only end in 413 is never held in memory.
    """

    __slots__ = ("_chunks", "_complete", "_disconnected", "_max_size", "_receive", "_size")

    def __init__(self, receive: Receive, max_size: int | None = None) -> None:
        self._receive = receive
        self._max_size = max_size
        self._chunks: list[bytes] = []
        self._size = 0
        self._complete = False
        self._disconnected = asyncio.Event()

    @property
    def disconnected(self) -> bool:
        return self._disconnected.is_set()

    async def _pump(self) -> None:
        message = await self._receive()
        kind = message.get("type")
        if kind == "http.disconnect":
            self._disconnected.set()
        elif kind == "http.request":
            chunk = message.get("body", b"")
            if chunk:
                self._size += len(chunk)
                if self._max_size is not None and self._size > self._max_size:
                    # Oversized: keep counting, stop holding bytes
                    self._chunks.clear()
                else:
                    self._chunks.append(chunk)
            if not message.get("more_body", False):
                self._complete = True

    async def read(self, limit: int) -> bytes:
        """Read the complete body, refusing more than *limit* bytes.

        Raises:
            ClientDisconnect: If the client went away before the body ended.
            PayloadTooLarge: As soon as the buffered body exceeds *limit*.
        """
        if self._max_size is not None:
            limit = min(limit, self._max_size)
        while not self._complete:
            if self.disconnected:
                raise ClientDisconnect()
            await self._pump()
            if self._size > limit:
                raise PayloadTooLarge(limit)
        if self._size > limit:
            raise PayloadTooLarge(limit)
        return b"".join(self._chunks)

    async def wait(self, seconds: float) -> None:
        """Sleep for *seconds*, waking early if the client disconnects.

        Raises:
            ClientDisconnect: If the client disconnected before or during
                the wait.
        """
        if self.disconnected:
            raise ClientDisconnect()
        if seconds <= 0:
            return

        watcher = asyncio.ensure_future(self._watch())
        try:
            await asyncio.wait({watcher}, timeout=seconds)
        finally:
            if not watcher.done():
                watcher.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await watcher
        if watcher.done() and not watcher.cancelled():
            # Surface transport errors raised by receive()
            watcher.result()
        if self.disconnected:
            raise ClientDisconnect()

    async def _watch(self) -> None:
        while not self.disconnected:
            await self._pump()
