"""Server configuration.

ServerConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mockingbird.errors import ConfigurationError
from mockingbird.middleware.cors import CORSConfig

DEFAULT_ROOT = "mock-server"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3456
DEFAULT_MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16 MB


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Mock server configuration. Immutable after creation.

    Only ``root`` is required. Override what you need::

        config = ServerConfig(root="mock-server", delay=0.25, serve_config=True)

    Raises:
        ConfigurationError: If a value is out of range.
    """

    # Route tree
    root: str | Path

    # Artificial latency per request, in seconds
    delay: float = 0.0

    # Synthetic GET /app-config.js
    serve_config: bool = False
    app_config: Mapping[str, Any] = field(default_factory=dict)

    # Server
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "info"

    # Pipeline
    cors: CORSConfig = field(default_factory=CORSConfig)
    cookie_secret: str = ""
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    # Extension points
    require: tuple[str, ...] = ()
    middleware: tuple[Callable[..., Any], ...] = ()

    def __post_init__(self) -> None:
        if not str(self.root):
            msg = "ServerConfig.root must name a directory."
            raise ConfigurationError(msg)
        if self.delay < 0:
            msg = f"ServerConfig.delay must be >= 0, got {self.delay!r}."
            raise ConfigurationError(msg)
        if self.max_content_length < 0:
            msg = f"ServerConfig.max_content_length must be >= 0, got {self.max_content_length!r}."
            raise ConfigurationError(msg)
        if not 0 <= self.port <= 65535:
            msg = f"ServerConfig.port must be between 0 and 65535, got {self.port!r}."
            raise ConfigurationError(msg)
        for mw in self.middleware:
            if not callable(mw):
                msg = f"ServerConfig.middleware entries must be callable, got {mw!r}."
                raise ConfigurationError(msg)
