"""Invoke helper — run sync or async controller actions from the ASGI path.

``async def`` actions are awaited on the event loop.  Plain actions run
in a worker thread so a blocking controller never stalls other requests.

Usage::

    from roost._internal.invoke import invoke

    result = await invoke(action)
"""

import inspect
from collections.abc import Callable
from typing import Any

import anyio.to_thread


async def invoke(action: Callable[[], Any]) -> Any:
    """Call a zero-argument action and return its (awaited) result."""
    if inspect.iscoroutinefunction(action):
        return await action()
    result = await anyio.to_thread.run_sync(action)
    if inspect.isawaitable(result):
        result = await result
    return result
