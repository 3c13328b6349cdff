"""
Decorator form of ``timeoutify``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import ParamSpec, TypeVar

from timeoutify.config import DeadlineConfig, get_default_config
from timeoutify.core import timeoutify

P = ParamSpec("P")
T = TypeVar("T")


def with_deadline(
    deadline_ms: float | None = None,
    *,
    operation: str | None = None,
    config: DeadlineConfig | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, asyncio.Future[T]]]:
    """
    Decorator that applies a deadline to every call of a function.

    Args:
        deadline_ms: Deadline in milliseconds. If None, looked up by
            operation name in ``config`` when the function is decorated.
        operation: Name of operation (defaults to function name).
        config: DeadlineConfig to consult. Defaults to the process-wide one.

    Returns:
        Decorator function.

    Example:
        >>> @with_deadline(2000)
        ... async def lookup(key):
        ...     return await store.get(key)
        >>>
        >>> @with_deadline()  # uses get_default_config().get_deadline("reindex")
        ... async def reindex():
        ...     ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, asyncio.Future[T]]:
        name = operation or func.__name__
        effective_ms = deadline_ms
        if effective_ms is None:
            effective_ms = (config or get_default_config()).get_deadline(name)
        return timeoutify(func, effective_ms, operation=name)

    return decorator
