"""Error mapping for the request pipeline.

Maps ``HTTPError`` exceptions and unexpected failures to plain-text
``Response`` objects. Every pipeline stage boundary goes through these,
so outer stages (CORS) still see and decorate the error response.
"""

import logging

from mockingbird.errors import HTTPError
from mockingbird.http.request import Request
from mockingbird.http.response import TEXT, Response

logger = logging.getLogger("mockingbird.server")


async def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a Response carrying its status and detail."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    response = Response(body=exc.detail, status=exc.status, content_type=TEXT)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    return Response(body="Internal Server Error", status=500, content_type=TEXT)
