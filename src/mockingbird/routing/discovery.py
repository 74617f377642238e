"""Filesystem route discovery for the mock root directory.

Walks the root directory tree and yields one ``CandidateRoute`` per
handler file. Nothing is imported here; loading and validation happen
in ``mockingbird.routing.loader``.

- Directory names become path segments; ``{name}`` directories become
  path parameters.
- ``<method>.py`` files (``get.py``, ``POST.py``, ...) are handlers for
  the directory they sit in.
- A directory named after a method is a handler package when it holds
  an ``__init__.py``. It never becomes a path segment.
- Everything else is a non-handler artifact (fixtures, notes) and is
  ignored.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

from mockingbird.errors import ConfigurationError
from mockingbird.routing.route import CandidateRoute, PathSegment, format_path
from mockingbird.routing.segments import translate

logger = logging.getLogger("mockingbird.routing")

# HTTP method tokens recognised as handler file names (case-insensitive)
HTTP_METHODS = frozenset({"get", "post", "put", "patch", "delete", "head", "options"})

HANDLER_SUFFIX = ".py"

_IGNORED_DIRS = frozenset({"__pycache__"})


def handler_method(item: Path) -> str | None:
    """Return the upper-cased HTTP method *item* handles, or ``None``.

    Files need the ``.py`` suffix; a bare ``post`` file is not a handler.
    Directories need the method name and an ``__init__.py``.
    """
    if item.is_dir():
        name = item.name.lower()
        if name in HTTP_METHODS and (item / "__init__.py").is_file():
            return name.upper()
        return None
    if item.suffix != HANDLER_SUFFIX:
        return None
    stem = item.stem.lower()
    if stem in HTTP_METHODS:
        return stem.upper()
    return None


def walk(root: str | Path) -> Iterator[CandidateRoute]:
    """Walk *root* depth-first and yield every handler it contains.

    The root is checked eagerly; the traversal itself is lazy and
    single-pass. At each level, handlers come first, then subdirectories
    in name order, so repeated walks over the same tree yield the same
    sequence.

    Raises:
        ConfigurationError: If *root* is not a directory.
    """
    root_dir = Path(root).resolve()
    if not root_dir.is_dir():
        raise ConfigurationError(f"Mock root directory not found: {root_dir}")
    return _walk_directory(root_dir, ())


def _walk_directory(
    directory: Path,
    segments: tuple[PathSegment, ...],
) -> Iterator[CandidateRoute]:
    """Yield handlers at this level, then recurse into subdirectories."""
    entries = [item for item in sorted(directory.iterdir()) if not _is_hidden(item)]

    subdirectories: list[Path] = []
    for item in entries:
        method = handler_method(item)
        if method is not None:
            logger.debug("Found %s %s in %s", method, format_path(segments), item)
            yield CandidateRoute(method=method, segments=segments, source=item)
        elif item.is_dir():
            if item.name.lower() in HTTP_METHODS:
                # Method tokens never contribute a path segment
                logger.debug("Ignoring %s: method directory without __init__.py", item)
                continue
            subdirectories.append(item)

    for item in subdirectories:
        yield from _walk_directory(item, (*segments, translate(item.name)))


def _is_hidden(item: Path) -> bool:
    return item.name.startswith(".") or item.name in _IGNORED_DIRS
