"""Body decoding stage.

Reads the whole request body (bounded by ``max_content_length``) and
stores both the raw bytes and the decoded value on the request. See
``mockingbird.http.body`` for the decoding table.
"""

from mockingbird.errors import PayloadTooLarge
from mockingbird.http.body import decode_body
from mockingbird.http.request import Request
from mockingbird.http.response import Response
from mockingbird.middleware.protocol import Next

DEFAULT_MAX_CONTENT_LENGTH = 16 * 1024 * 1024


class BodyParserMiddleware:
    """Decode the request body before routing.

    Raises:
        PayloadTooLarge: If Content-Length or the received body exceeds
            ``max_content_length``.
        BadRequest: If the body does not match its content type.
        UnsupportedMediaType: If a ``text/*`` charset is unknown.
    """

    __slots__ = ("max_content_length",)

    def __init__(self, max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH) -> None:
        self.max_content_length = max_content_length

    async def __call__(self, request: Request, next: Next) -> Response:
        declared = request.content_length
        if declared is not None and declared > self.max_content_length:
            raise PayloadTooLarge(self.max_content_length)
        raw = await request.read_body(self.max_content_length)
        body = decode_body(request.content_type, raw)
        return await next(request.with_body(body, raw))
