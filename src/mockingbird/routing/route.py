"""PathSegment, CandidateRoute, HandlerUnit and RouteMatch frozen dataclasses."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One segment of a route pattern.

    Static:  ``users``  (is_param=False, value is the literal text)
    Param:   ``{id}``   (is_param=True, value is the parameter name)
    """

    value: str
    is_param: bool = False

    def __str__(self) -> str:
        if self.is_param:
            return "{" + self.value + "}"
        return self.value


def format_path(segments: Sequence[PathSegment]) -> str:
    """Render segments as a URL pattern (``/users/{userId}``, ``/`` for none)."""
    return "/" + "/".join(str(seg) for seg in segments)


@dataclass(frozen=True, slots=True)
class CandidateRoute:
    """A handler discovered by the tree walker, not yet loaded."""

    method: str
    segments: tuple[PathSegment, ...]
    source: Path

    @property
    def path(self) -> str:
        return format_path(self.segments)

    @property
    def label(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(frozen=True, slots=True)
class HandlerUnit:
    """A loaded, validated handler bound to one method and pattern.

    ``source`` is ``None`` for built-in routes such as ``/app-config.js``.
    """

    method: str
    segments: tuple[PathSegment, ...]
    handler: Callable[..., Any]
    source: Path | None = None

    @property
    def path(self) -> str:
        return format_path(self.segments)

    @property
    def label(self) -> str:
        return f"{self.method} {self.path}"

    @property
    def param_count(self) -> int:
        return sum(1 for seg in self.segments if seg.is_param)

    @property
    def shape(self) -> tuple[str, tuple[str | None, ...]]:
        """Method plus static texts, with parameters reduced to ``None``.

        Two units with the same shape match exactly the same requests.
        """
        return self.method, tuple(None if seg.is_param else seg.value for seg in self.segments)

    def match(self, parts: Sequence[str]) -> dict[str, str] | None:
        """Match already-split request path parts, binding parameters.

        Returns ``None`` unless every segment matches.
        """
        if len(parts) != len(self.segments):
            return None
        params: dict[str, str] = {}
        for seg, part in zip(self.segments, parts, strict=True):
            if seg.is_param:
                if not part:
                    return None
                params[seg.value] = part
            elif seg.value != part:
                return None
        return params


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    unit: HandlerUnit
    params: dict[str, str]
