"""Bridge between Click's synchronous callbacks and async service code."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

T = TypeVar("T")


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Run the decorated coroutine function to completion with ``asyncio.run``.

    Place it below the Click decorators:

        @workflows.command()
        @click.argument("workflow_id")
        @coro
        async def run(workflow_id: str) -> None:
            ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper
