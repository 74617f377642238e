"""Mockingbird CLI: serve a mock tree and inspect its routes.

Entry point registered as ``mockingbird`` in ``pyproject.toml``::

    [project.scripts]
    mockingbird = "mockingbird.cli:main"
"""

import argparse
import sys

from mockingbird.config import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_ROOT


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``mockingbird`` command."""
    parser = argparse.ArgumentParser(
        prog="mockingbird",
        description="Mockingbird: a mock HTTP backend compiled from a directory tree.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- mockingbird serve ------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Compile the tree and serve it")
    serve_parser.add_argument(
        "--root",
        default=DEFAULT_ROOT,
        help=f"Directory compiled into routes (default: {DEFAULT_ROOT})",
    )
    serve_parser.add_argument("--host", default=DEFAULT_HOST, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Bind port number")
    serve_parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        metavar="MS",
        help="Milliseconds to hold every request before handling it",
    )
    serve_parser.add_argument(
        "--serve-config",
        action="store_true",
        help="Serve APP_CONFIG_* environment variables at /app-config.js",
    )
    serve_parser.add_argument(
        "--cookie-secret",
        default="",
        help="Secret used to sign and verify cookies",
    )
    serve_parser.add_argument(
        "--require",
        action="append",
        default=[],
        metavar="MODULE",
        help="Import a module before loading handlers (repeatable)",
    )
    serve_parser.add_argument(
        "--middleware",
        default=None,
        metavar="FILE",
        help="Python file defining a module-level `middleware`",
    )
    serve_parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="Logging verbosity",
    )

    # -- mockingbird routes -----------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a tree compiles to")
    routes_parser.add_argument(
        "--root",
        default=DEFAULT_ROOT,
        help=f"Directory compiled into routes (default: {DEFAULT_ROOT})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from mockingbird.cli._serve import run_serve

        run_serve(args)
    elif args.command == "routes":
        from mockingbird.cli._routes import run_routes

        run_routes(args)
