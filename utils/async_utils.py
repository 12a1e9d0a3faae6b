"""
Bridge between the synchronous Streamlit script and the async controllers
"""

import asyncio
from typing import Any, Awaitable, TypeVar

T = TypeVar("T")


def run_async(awaitable: Awaitable[T]) -> T:
    """
    Run a controller coroutine to completion from synchronous code

    Streamlit executes the page script in a worker thread without a running
    event loop, so each UI action drives its own short-lived loop.

    Args:
        awaitable: Coroutine returned by a controller method

    Returns:
        The coroutine result
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(_as_coroutine(awaitable))
    raise RuntimeError("run_async() cannot be called from a running event loop")


async def _as_coroutine(awaitable: Awaitable[Any]) -> Any:
    return await awaitable
