"""Artificial latency stage."""

from mockingbird.http.request import Request
from mockingbird.http.response import Response
from mockingbird.middleware.protocol import Next


class DelayMiddleware:
    """Hold every request for a fixed number of seconds.

    The wait is per request and never blocks other requests. If the
    client disconnects while waiting, ``ClientDisconnect`` propagates and
    no later stage runs.
    """

    __slots__ = ("seconds",)

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds

    async def __call__(self, request: Request, next: Next) -> Response:
        if self.seconds > 0:
            await request.wait(self.seconds)
        return await next(request)
