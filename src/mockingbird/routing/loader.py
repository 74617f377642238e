"""Handler loading and validation.

Turns a ``CandidateRoute`` into a ``HandlerUnit`` by importing the
handler file and checking that it exports a ``(request, response)``
callable. Any problem raises a ``ConfigurationError`` naming the route,
so the server refuses to start with a known-broken tree.

Handler files look like::

    # users/{userId}/get.py
    def handler(request, response):
        response.status(200).send({"id": request.params["userId"]})

A callable named after the method (``def get(request, response)``) is
accepted when there is no ``handler``. Both ``def`` and ``async def``
work.
"""

import importlib.util
import inspect
import itertools
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from mockingbird.errors import ConfigurationError, InvalidHandlerError
from mockingbird.routing.route import CandidateRoute, HandlerUnit

HANDLER_ATTRIBUTE = "handler"

_module_ids = itertools.count()


def import_source(source: Path, module_name: str | None = None) -> ModuleType:
    """Execute a Python file (or package directory) as a fresh module.

    Each call yields a new module object, so two servers built from the
    same tree never share handler state.

    A file module is registered in ``sys.modules`` only while it executes.
    A package stays registered: its relative imports, including ones run
    later from inside a handler, resolve through that entry.
    """
    name = module_name or f"_mockingbird_{next(_module_ids)}"
    if source.is_dir():
        spec = importlib.util.spec_from_file_location(
            name,
            source / "__init__.py",
            submodule_search_locations=[str(source)],
        )
    else:
        spec = importlib.util.spec_from_file_location(name, source)
    if spec is None or spec.loader is None:
        msg = f"Cannot import {source}"
        raise ImportError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[name]
        raise
    if not source.is_dir():
        sys.modules.pop(name, None)
    return module


def load(candidate: CandidateRoute) -> HandlerUnit:
    """Load and validate the handler behind *candidate*.

    Raises:
        ConfigurationError: If a path parameter name is empty or repeated.
        InvalidHandlerError: If the file fails to import, exports no
            callable, or the callable cannot take ``(request, response)``.
    """
    validate_segments(candidate)

    try:
        module = import_source(candidate.source)
    except Exception as exc:
        raise InvalidHandlerError(
            candidate.label, f"could not be loaded: {exc}", candidate.source
        ) from exc

    handler = _find_handler(module, candidate.method)
    if handler is None:
        raise InvalidHandlerError(
            candidate.label,
            f"must export a function (define {HANDLER_ATTRIBUTE}(request, response))",
            candidate.source,
        )
    if not accepts_request_response(handler):
        raise InvalidHandlerError(
            candidate.label,
            "must accept (request, response) arguments",
            candidate.source,
        )

    return HandlerUnit(
        method=candidate.method,
        segments=candidate.segments,
        handler=handler,
        source=candidate.source,
    )


def validate_segments(candidate: CandidateRoute) -> None:
    """Reject empty or repeated path parameter names."""
    seen: set[str] = set()
    for seg in candidate.segments:
        if not seg.is_param:
            continue
        if not seg.value:
            msg = (
                f'Route "{candidate.label}" has an empty path parameter name '
                f"({candidate.source})"
            )
            raise ConfigurationError(msg)
        if seg.value in seen:
            msg = (
                f'Route "{candidate.label}" repeats path parameter {seg.value!r} '
                f"({candidate.source})"
            )
            raise ConfigurationError(msg)
        seen.add(seg.value)


def accepts_request_response(handler: Any) -> bool:
    """True if *handler* can be called as ``handler(request, response)``."""
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins); trust callable()
        return True
    try:
        sig.bind(None, None)
    except TypeError:
        return False
    return True


def _find_handler(module: ModuleType, method: str) -> Any:
    for name in (HANDLER_ATTRIBUTE, method.lower()):
        candidate = getattr(module, name, None)
        if candidate is not None:
            return candidate if callable(candidate) else None
    return None
