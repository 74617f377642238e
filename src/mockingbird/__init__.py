"""Mockingbird: a mock HTTP backend compiled from a directory tree.

Directories become URL segments, ``{name}`` directories become path
parameters, and ``<method>.py`` files are handlers::

    mock-server/
        users/
            get.py          # GET /users
            post.py         # POST /users
            {userId}/
                get.py      # GET /users/{userId}

A handler receives the request and a response sink::

    def handler(request, response):
        response.status(200).send({"id": request.params["userId"]})

Basic usage::

    from mockingbird import create_app

    app = create_app("mock-server", delay=0.2, serve_config=True)
    app.run()

Or from the command line::

    mockingbird serve --root mock-server --delay 200
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BadRequest",
    "ClientDisconnect",
    "ConfigurationError",
    "HTTPError",
    "InvalidHandlerError",
    "Middleware",
    "MockServer",
    "MockingbirdError",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "ResponseSink",
    "RouteConflictError",
    "ServerConfig",
    "create_app",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import mockingbird`` fast while providing a clean top-level API.
    """
    if name in ("MockServer", "create_app"):
        from mockingbird import app as _app

        return getattr(_app, name)

    if name == "ServerConfig":
        from mockingbird.config import ServerConfig

        return ServerConfig

    if name == "Request":
        from mockingbird.http.request import Request

        return Request

    if name in ("Response", "ResponseSink"):
        from mockingbird.http import response as _resp

        return getattr(_resp, name)

    if name in ("Middleware", "Next"):
        from mockingbird.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "ClientDisconnect",
        "ConfigurationError",
        "HTTPError",
        "InvalidHandlerError",
        "MockingbirdError",
        "NotFound",
        "RouteConflictError",
    ):
        from mockingbird import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
