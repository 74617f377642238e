"""Cookie parsing stage.

Parses the ``Cookie`` header into ``request.cookies``. With a signer,
``s:``-prefixed values are verified and moved into
``request.signed_cookies``; tampered ones are dropped.
"""

from mockingbird.http.cookies import CookieSigner, parse_cookies
from mockingbird.http.request import Request
from mockingbird.http.response import Response
from mockingbird.middleware.protocol import Next


class CookieMiddleware:
    __slots__ = ("signer",)

    def __init__(self, signer: CookieSigner | None = None) -> None:
        self.signer = signer

    async def __call__(self, request: Request, next: Next) -> Response:
        cookies = parse_cookies(request.headers.get("cookie", ""))
        signed: dict[str, str] = {}
        if self.signer is not None:
            cookies, signed = self.signer.split(cookies)
        return await next(request.with_cookies(cookies, signed))
