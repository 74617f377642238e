"""The synthetic ``GET /app-config.js`` route.

Exposes configuration values to a browser front end as a global::

    window.APP_CONFIG = {"API_URL": "http://localhost:3456"};

Registered only when ``serve_config`` is enabled; otherwise the path
is an ordinary miss.
"""

import json
from collections.abc import Mapping
from typing import Any

from mockingbird.http.request import Request
from mockingbird.http.response import ResponseSink
from mockingbird.routing.route import HandlerUnit, PathSegment

APP_CONFIG_PATH = "/app-config.js"
APP_CONFIG_PREFIX = "APP_CONFIG_"
JAVASCRIPT = "application/javascript; charset=utf-8"


def render_config_script(values: Mapping[str, Any]) -> str:
    payload = json.dumps(dict(values), sort_keys=True)
    # Keep the payload inert inside an inline <script> block
    payload = payload.replace("</", "<\\/")
    return f"window.APP_CONFIG = {payload};\n"


def config_from_environ(
    environ: Mapping[str, str], prefix: str = APP_CONFIG_PREFIX
) -> dict[str, str]:
    """Collect ``<prefix>NAME=value`` variables as ``{"NAME": value}``."""
    return {
        key[len(prefix) :]: value
        for key, value in sorted(environ.items())
        if key.startswith(prefix) and len(key) > len(prefix)
    }


def app_config_route(values: Mapping[str, Any]) -> HandlerUnit:
    """Build the built-in unit serving the rendered script."""
    script = render_config_script(values)

    def serve_app_config(request: Request, response: ResponseSink) -> None:
        response.set_header("Content-Type", JAVASCRIPT).send(script)

    return HandlerUnit(
        method="GET",
        segments=(PathSegment(APP_CONFIG_PATH.lstrip("/")),),
        handler=serve_app_config,
    )
