"""
Post-processing that works for sync and async evaluator primitives
"""

import inspect
from typing import Any, Callable


def then(value: Any, callback: Callable[[Any], Any]) -> Any:
    """
    Apply callback to value, awaiting it first if it is awaitable

    Returns the callback result directly for plain values, or a coroutine
    resolving to it for awaitables.
    """
    if inspect.isawaitable(value):
        async def _resolved():
            return callback(await value)
        return _resolved()
    return callback(value)
