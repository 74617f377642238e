"""CORS stage.

Runs outside cookie and body decoding, so it decorates every response
the pipeline produces: handler responses, 404s and error responses.
"""

from dataclasses import dataclass

from mockingbird.http.request import Request
from mockingbird.http.response import Response
from mockingbird.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    The defaults suit a local mock backend: any origin is reflected and
    credentials are allowed. Narrow what you need::

        CORSConfig(
            allow_origins=("http://localhost:5173",),
            allow_credentials=False,
        )

    An empty ``allow_headers`` reflects whatever the preflight asks for.
    """

    allow_origins: tuple[str, ...] = ("*",)
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "PUT", "PATCH", "POST", "DELETE")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = True
    max_age: int = 600  # 10 minutes


class CORSMiddleware:
    """Cross-Origin Resource Sharing for the mock server.

    Handles:
    - Preflight ``OPTIONS`` requests (``Origin`` plus
      ``Access-Control-Request-Method``) with a 204
    - Actual requests, adding CORS headers to the response
    - Credential support (``Access-Control-Allow-Credentials``)

    An ``OPTIONS`` request without ``Access-Control-Request-Method`` is
    not a preflight and goes through to the route table.
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")

        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )

        return response

    def _preflight_response(self, origin: str, requested_headers: str | None) -> Response:
        cfg = self.config
        response = Response(body="", status=204, content_type=None)
        response = self._add_cors_headers(response, origin)
        response = response.with_header(
            "Access-Control-Allow-Methods",
            ", ".join(cfg.allow_methods),
        )

        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(cfg.allow_headers),
            )
        elif requested_headers:
            response = response.with_header("Access-Control-Allow-Headers", requested_headers)
            response = response.with_header("Vary", "Access-Control-Request-Headers")

        return response.with_header("Access-Control-Max-Age", str(cfg.max_age))

    async def __call__(self, request: Request, next: Next) -> Response:
        origin = request.headers.get("origin")

        # No Origin header: not a CORS request
        if origin is None or not self._is_allowed_origin(origin):
            return await next(request)

        if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
            return self._preflight_response(
                origin, request.headers.get("access-control-request-headers")
            )

        response = await next(request)
        return self._add_cors_headers(response, origin)
