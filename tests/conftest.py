"""Shared fixtures: mock trees built under ``tmp_path``."""

import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Echoes what the handler saw; byte bodies become a JSON-friendly summary
ECHO_HANDLER = """
def handler(request, response):
    body = request.body
    if isinstance(body, bytes):
        body = {"length": len(body), "data": list(body)}
    response.status(200).send(
        {
            "method": request.method,
            "path": request.path,
            "params": dict(request.params),
            "body": body,
        }
    )
"""

type TreeFactory = Callable[..., Path]


def write_tree(root: Path, tree: dict[str, Any]) -> Path:
    """Create *tree* under *root*: dict values are directories, strings files."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in tree.items():
        target = root / name
        if isinstance(content, dict):
            write_tree(target, content)
        else:
            target.write_text(textwrap.dedent(content))
    return root


@pytest.fixture
def echo_handler() -> str:
    return ECHO_HANDLER


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Build a mock tree from a nested dict and return its root."""

    def _make(tree: dict[str, Any], name: str = "mock-server") -> Path:
        return write_tree(tmp_path / name, tree)

    return _make


@pytest.fixture
def users_tree(make_tree: TreeFactory) -> Path:
    """Root handlers, a users collection and a ``{userId}`` item.

    Also holds non-handler artifacts that must be ignored: a bare
    ``post`` file at the root and ``nonHandler`` files.
    """
    return make_tree(
        {
            "users": {
                "{userId}": {
                    "get.py": ECHO_HANDLER,
                    "put.py": ECHO_HANDLER,
                    "nonHandler": ECHO_HANDLER,
                },
                "get.py": ECHO_HANDLER,
                "post.py": ECHO_HANDLER,
                "nonHandler.py": ECHO_HANDLER,
            },
            "get.py": ECHO_HANDLER,
            "post": ECHO_HANDLER,
        }
    )
