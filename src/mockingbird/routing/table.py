"""Compiled route table with specificity-ordered matching.

Built once at startup from the tree walker's candidates and immutable
afterwards, so concurrent requests read it without locking.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from mockingbird.errors import RouteConflictError
from mockingbird.routing.loader import load
from mockingbird.routing.route import CandidateRoute, HandlerUnit, RouteMatch
from mockingbird.routing.segments import split_path

logger = logging.getLogger("mockingbird.routing")

type Loader = Callable[[CandidateRoute], HandlerUnit]


class RouteTable:
    """Compiled routes grouped by method and segment count.

    Within a group, units are ordered by parameter count (more static
    segments first), then by discovery order. The first full match wins,
    so a static route always beats a parameterised one for the same path.

    Usage::

        table = RouteTable.build(walk("mock-server"))
        match = table.lookup("GET", "/users/42")
        if match is not None:
            match.unit.handler, match.params  # ..., {"userId": "42"}
    """

    __slots__ = ("_groups", "_units")

    def __init__(self, units: Iterable[HandlerUnit]) -> None:
        self._units: tuple[HandlerUnit, ...] = tuple(units)

        ordered: dict[str, dict[int, list[tuple[int, int, HandlerUnit]]]] = {}
        for order, unit in enumerate(self._units):
            by_length = ordered.setdefault(unit.method, {})
            by_length.setdefault(len(unit.segments), []).append(
                (unit.param_count, order, unit)
            )

        self._groups: dict[str, dict[int, tuple[HandlerUnit, ...]]] = {
            method: {
                length: tuple(unit for _, _, unit in sorted(entries, key=lambda e: e[:2]))
                for length, entries in by_length.items()
            }
            for method, by_length in ordered.items()
        }

    @classmethod
    def build(
        cls,
        candidates: Iterable[CandidateRoute],
        *,
        builtins: Iterable[HandlerUnit] = (),
        loader: Loader = load,
    ) -> RouteTable:
        """Validate and load every candidate, then compile the table.

        *builtins* are registered ahead of the discovered routes.
        Loading is eager: the first broken handler aborts the build and
        no partial table is returned.

        Raises:
            ConfigurationError: On an invalid handler or parameter name.
            RouteConflictError: When two routes share a method and shape.
        """
        units: list[HandlerUnit] = []
        seen: dict[tuple[str, tuple[str | None, ...]], HandlerUnit] = {}

        def register(unit: HandlerUnit) -> None:
            previous = seen.get(unit.shape)
            if previous is not None:
                raise RouteConflictError(unit.label, previous.source, unit.source)
            seen[unit.shape] = unit
            units.append(unit)

        for unit in builtins:
            register(unit)
        for candidate in candidates:
            unit = loader(candidate)
            register(unit)
            logger.debug("Loaded %s from %s", unit.label, unit.source)

        return cls(units)

    @property
    def routes(self) -> tuple[HandlerUnit, ...]:
        """All units in registration (discovery) order."""
        return self._units

    def __len__(self) -> int:
        return len(self._units)

    def lookup(self, method: str, path: str) -> RouteMatch | None:
        """Find the handler for *method* and a concrete *path*.

        Returns ``None`` when nothing matches, including when the path is
        only registered under other methods.
        """
        return self.lookup_parts(method, split_path(path))

    def lookup_parts(self, method: str, parts: Sequence[str]) -> RouteMatch | None:
        """Like ``lookup``, for a path already split into decoded parts."""
        for unit in self._groups.get(method.upper(), {}).get(len(parts), ()):
            params = unit.match(parts)
            if params is not None:
                return RouteMatch(unit=unit, params=params)
        return None
