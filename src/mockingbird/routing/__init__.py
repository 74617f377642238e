"""Routing: the filesystem-to-route compiler.

Two phases, kept apart so matching can be tested without a real tree:

1. ``walk()`` scans the mock root into ``CandidateRoute`` entries.
2. ``RouteTable.build()`` loads and validates each candidate, then
   compiles an immutable table queried once per request.
"""

from mockingbird.routing.discovery import HTTP_METHODS, walk
from mockingbird.routing.loader import load
from mockingbird.routing.route import CandidateRoute, HandlerUnit, PathSegment, RouteMatch
from mockingbird.routing.segments import split_path, split_raw_path, translate
from mockingbird.routing.table import RouteTable

__all__ = [
    "HTTP_METHODS",
    "CandidateRoute",
    "HandlerUnit",
    "PathSegment",
    "RouteMatch",
    "RouteTable",
    "load",
    "split_path",
    "split_raw_path",
    "translate",
    "walk",
]
