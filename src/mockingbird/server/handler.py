"""ASGI handler: translates ASGI scope/messages to mockingbird types.

The only component that touches raw ASGI request messages. Builds a
``Request``, runs it through the middleware stages and the route table,
and sends the resulting ``Response`` back through ASGI ``send()``.

Every stage is wrapped so that an exception raised inside it becomes a
response at that stage's boundary. A ``ClientDisconnect`` is the one
exception that crosses all boundaries: the request is abandoned and
nothing is sent.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from mockingbird._internal.asgi import BodyChannel, Receive, Scope, Send
from mockingbird._internal.invoke import invoke
from mockingbird.errors import ClientDisconnect, HandlerError, HTTPError, NotFound
from mockingbird.http.cookies import CookieSigner
from mockingbird.http.request import Request
from mockingbird.http.response import Response, ResponseSink
from mockingbird.middleware.protocol import Next
from mockingbird.routing.route import RouteMatch
from mockingbird.routing.table import RouteTable
from mockingbird.server.errors import handle_http_error, handle_internal_error
from mockingbird.server.sender import send_response

logger = logging.getLogger("mockingbird.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    table: RouteTable,
    middleware: Sequence[Callable[..., Any]],
    signer: CookieSigner | None = None,
    max_content_length: int | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    channel = BodyChannel(receive, max_content_length)
    request = Request.from_asgi(scope, channel)

    # Innermost stage: route lookup and handler invocation
    async def dispatch(req: Request) -> Response:
        match = table.lookup_parts(req.method, req.path_parts)
        if match is None:
            raise NotFound()
        return await _invoke_handler(match, req, signer=signer)

    # Wrap middleware around the dispatch, each behind its own error boundary
    handler: Next = _guard(dispatch)
    for mw in reversed(middleware):
        outer = handler
        mw_ref = mw

        async def make_next(req: Request, _mw: Any = mw_ref, _next: Next = outer) -> Response:
            return await invoke(_mw, req, _next)

        handler = _guard(make_next)

    try:
        response = await handler(request)
    except ClientDisconnect:
        logger.debug("Client disconnected: %s %s", request.method, request.path)
        return

    if channel.disconnected:
        logger.debug("Client disconnected: %s %s", request.method, request.path)
        return

    await send_response(response, send)


def _guard(inner: Next) -> Next:
    """Convert exceptions escaping *inner* into responses."""

    async def guarded(req: Request) -> Response:
        try:
            return await inner(req)
        except ClientDisconnect:
            raise
        except HTTPError as exc:
            return await handle_http_error(exc, req)
        except Exception as exc:
            return await handle_internal_error(exc, req)

    return guarded


async def _invoke_handler(
    match: RouteMatch,
    request: Request,
    *,
    signer: CookieSigner | None = None,
) -> Response:
    """Call the matched handler with the request and a fresh response sink."""
    if request.is_disconnected:
        raise ClientDisconnect()

    unit = match.unit
    request = request.with_params(match.params)
    sink = ResponseSink(route=unit.label, signer=signer)

    await invoke(unit.handler, request, sink)

    if sink.response is None:
        msg = f'Handler for route "{unit.label}" finished without sending a response'
        raise HandlerError(msg)
    return sink.response
