"""Mockingbird application class.

A ``MockServer`` compiles its route tree eagerly in ``__init__``: a
broken handler file fails construction, before any socket is bound or
request accepted. After that the server is immutable, so concurrent
requests share the route table and middleware chain without locking.
"""

import importlib
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from mockingbird._internal.asgi import Receive, Scope, Send
from mockingbird.config import ServerConfig
from mockingbird.errors import ConfigurationError
from mockingbird.http.cookies import CookieSigner
from mockingbird.middleware import (
    BodyParserMiddleware,
    CookieMiddleware,
    CORSMiddleware,
    DelayMiddleware,
)
from mockingbird.routing.discovery import walk
from mockingbird.routing.route import HandlerUnit
from mockingbird.routing.table import RouteTable
from mockingbird.server.app_config import app_config_route
from mockingbird.server.handler import handle_request

logger = logging.getLogger("mockingbird.routing")


class MockServer:
    """A mock HTTP backend compiled from a directory tree.

    Usage::

        server = MockServer(ServerConfig(root="mock-server", delay=0.2))
        server.run()

    The instance is an ASGI 3 application, so any ASGI server (or
    ``mockingbird.testing.TestClient``) can drive it directly.

    Raises:
        ConfigurationError: If the tree cannot be compiled, or a
            ``require`` module fails to import.
    """

    __slots__ = ("_middleware", "_signer", "_table", "config")

    def __init__(self, config: ServerConfig) -> None:
        self.config = config

        for module_name in config.require:
            _require(module_name)

        builtins: list[HandlerUnit] = []
        if config.serve_config:
            builtins.append(app_config_route(config.app_config))

        self._table: RouteTable = RouteTable.build(walk(config.root), builtins=builtins)
        self._signer: CookieSigner | None = (
            CookieSigner(config.cookie_secret) if config.cookie_secret else None
        )
        self._middleware: tuple[Callable[..., Any], ...] = (
            DelayMiddleware(config.delay),
            CORSMiddleware(config.cors),
            CookieMiddleware(self._signer),
            BodyParserMiddleware(config.max_content_length),
            *config.middleware,
        )

        logger.info("Compiled %d routes from %s", len(self._table), Path(config.root).resolve())

    @property
    def routes(self) -> tuple[HandlerUnit, ...]:
        """Every compiled unit, built-ins first, then discovery order."""
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve with uvicorn until interrupted."""
        from mockingbird.server.run import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Acknowledges lifespan scopes and hands HTTP scopes to the request
        pipeline. Other scope types (websocket) are not served.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        await handle_request(
            scope,
            receive,
            send,
            table=self._table,
            middleware=self._middleware,
            signer=self._signer,
            max_content_length=self.config.max_content_length,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Routes were compiled at construction, so startup has nothing left
        to do but report completion.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def create_app(
    root: str | Path,
    *,
    delay: float = 0.0,
    serve_config: bool = False,
    **options: Any,
) -> MockServer:
    """Compile *root* into a ready-to-serve ``MockServer``.

    *delay* is in seconds. Remaining keyword arguments are passed to
    ``ServerConfig``::

        app = create_app("mock-server", delay=0.1, cookie_secret="s3cret")
    """
    return MockServer(ServerConfig(root=root, delay=delay, serve_config=serve_config, **options))


def _require(module_name: str) -> None:
    try:
        importlib.import_module(module_name)
    except Exception as exc:
        msg = f"Could not import required module {module_name!r}: {exc}"
        raise ConfigurationError(msg) from exc
    logger.debug("Imported required module %s", module_name)
