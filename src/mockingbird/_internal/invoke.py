"""Invoke helpers: call sync or async handlers uniformly.

Handler files may define ``def`` or ``async def`` callables, and so may
user middleware. The sync/async check lives here only.

Usage::

    from mockingbird._internal.invoke import invoke

    await invoke(unit.handler, request, sink)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
