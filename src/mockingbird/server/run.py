"""Serve an ASGI app with uvicorn."""

import logging
from typing import Any

logger = logging.getLogger("mockingbird.server")


def run_server(app: Any, host: str, port: int, *, log_level: str = "info") -> None:
    """Block serving *app* on ``host:port`` until interrupted."""
    import uvicorn

    logger.info("Serving on http://%s:%d", host, port)
    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, lifespan="on")
    uvicorn.Server(config).run()
