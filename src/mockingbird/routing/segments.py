"""Filesystem names and request paths to path segments.

The same delimiter rules apply at compile time (directory names) and at
match time (request paths), so both directions live here.
"""

from urllib.parse import unquote

from mockingbird.routing.route import PathSegment

PARAM_OPEN = "{"
PARAM_CLOSE = "}"


def translate(name: str) -> PathSegment:
    """Translate one directory name into one path segment.

    Pure and total: every name maps to exactly one segment::

        "users"    -> PathSegment("users")
        "{userId}" -> PathSegment("userId", is_param=True)
        "{}"       -> PathSegment("", is_param=True)   # rejected at load time
    """
    if len(name) >= 2 and name.startswith(PARAM_OPEN) and name.endswith(PARAM_CLOSE):
        return PathSegment(name[1:-1], is_param=True)
    return PathSegment(name)


def split_path(path: str) -> list[str]:
    """Split a request path into non-empty parts.

    Leading, trailing and repeated slashes are ignored, so ``/`` yields
    no parts and ``/users//42/`` yields ``["users", "42"]``.
    """
    return [part for part in path.strip("/").split("/") if part]


def split_raw_path(raw_path: bytes) -> list[str]:
    """Split a percent-encoded request target, then decode each part.

    Splitting first keeps an encoded slash inside its segment, so
    ``/users/a%2Fb`` yields ``["users", "a/b"]``.
    """
    return [unquote(part) for part in raw_path.decode("latin-1").split("/") if part]
