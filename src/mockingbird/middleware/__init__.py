"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in stages, outermost first:
    DelayMiddleware -- Fixed artificial latency, cancelled on disconnect
    CORSMiddleware -- Origin reflection and preflight answers
    CookieMiddleware -- Cookie parsing and signed-cookie verification
    BodyParserMiddleware -- Content-Type driven body decoding
"""

from mockingbird.middleware.body import BodyParserMiddleware
from mockingbird.middleware.cookies import CookieMiddleware
from mockingbird.middleware.cors import CORSConfig, CORSMiddleware
from mockingbird.middleware.delay import DelayMiddleware
from mockingbird.middleware.protocol import Middleware, Next

__all__ = [
    "BodyParserMiddleware",
    "CORSConfig",
    "CORSMiddleware",
    "CookieMiddleware",
    "DelayMiddleware",
    "Middleware",
    "Next",
]
