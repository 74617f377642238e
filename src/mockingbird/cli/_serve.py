"""``mockingbird serve``: compile the tree and serve it with uvicorn."""

import argparse
import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from mockingbird.app import MockServer
from mockingbird.config import ServerConfig
from mockingbird.errors import ConfigurationError
from mockingbird.routing.loader import import_source
from mockingbird.server.app_config import config_from_environ


def run_serve(args: argparse.Namespace) -> None:
    """Build a ``ServerConfig`` from *args* and the environment, then serve.

    Startup errors print ``Error: <message>`` and exit with status 1.
    """
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        middleware = load_middleware(args.middleware) if args.middleware else ()
        config = ServerConfig(
            root=args.root,
            delay=args.delay / 1000,
            serve_config=args.serve_config,
            app_config=config_from_environ(os.environ),
            host=args.host,
            port=args.port,
            log_level=args.log_level,
            cookie_secret=args.cookie_secret,
            require=tuple(args.require),
            middleware=middleware,
        )
        server = MockServer(config)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    server.run()


def load_middleware(path: str | Path) -> tuple[Callable[..., Any], ...]:
    """Import *path* and return its ``middleware`` as a tuple of callables.

    Raises:
        ConfigurationError: If the file cannot be imported or does not
            define usable middleware.
    """
    source = Path(path).resolve()
    if not source.is_file():
        msg = f"Middleware file not found: {source}"
        raise ConfigurationError(msg)
    try:
        module = import_source(source)
    except Exception as exc:
        msg = f"Middleware file {source} could not be loaded: {exc}"
        raise ConfigurationError(msg) from exc

    exported = getattr(module, "middleware", None)
    if exported is None:
        msg = f"Middleware file {source} must define `middleware`"
        raise ConfigurationError(msg)

    stages = (exported,) if callable(exported) else tuple(exported)
    for stage in stages:
        if not callable(stage):
            msg = f"Middleware file {source} exports a non-callable entry: {stage!r}"
            raise ConfigurationError(msg)
    return stages
