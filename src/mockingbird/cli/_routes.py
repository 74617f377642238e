"""``mockingbird routes``: list the routes a tree compiles to.

Compiling the tree also validates every handler, so this doubles as a
pre-flight check for ``serve``.
"""

import argparse
import sys

from mockingbird.errors import ConfigurationError
from mockingbird.routing.discovery import walk
from mockingbird.routing.table import RouteTable


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH and SOURCE for ``args.root``."""
    try:
        table = RouteTable.build(walk(args.root))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = table.routes
    if not routes:
        print("No routes found.")
        return

    rows = [(unit.method, unit.path, str(unit.source)) for unit in routes]

    # Column widths
    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "SOURCE"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, source in rows:
        print(fmt.format(method, path, source))
