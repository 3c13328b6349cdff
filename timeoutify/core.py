"""
Deadline wrapper for asynchronous calls.

``timeoutify`` turns any callable into one whose result must settle within
a fixed number of milliseconds of being invoked. The call and a timer are
raced on the running event loop; whichever settles first decides the
outcome, and the timer is released as soon as the result is settled.

The underlying call is never cancelled. When the deadline wins, the call
keeps running in the background and whatever it eventually produces is
discarded.

Example:
    >>> from timeoutify import timeoutify, DeadlineExceeded
    >>>
    >>> fetch_quickly = timeoutify(Client.fetch, 5000, client)
    >>> try:
    ...     page = await fetch_quickly("https://example.com")
    ... except DeadlineExceeded:
    ...     page = None
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from timeoutify.exceptions import DeadlineExceeded

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Unbound:
    """Marker type for "no receiver was supplied"."""

    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND: Any = _Unbound()

# Detached calls are only weakly referenced by the event loop.
_running_calls: set[asyncio.Task[Any]] = set()


def timeoutify(
    fn: Callable[..., Awaitable[T] | T],
    deadline_ms: float,
    receiver: Any = UNBOUND,
    *,
    operation: str | None = None,
) -> Callable[..., asyncio.Future[T]]:
    """
    Wrap a function so each call must settle within ``deadline_ms``.

    Nothing is scheduled here; the timer and the call both start when the
    returned function is invoked, which must happen on a running event loop.

    Args:
        fn: The function to call. May be a coroutine function, a function
            returning an awaitable, or a plain function.
        deadline_ms: Time allowed for each call to settle, in milliseconds.
            Not validated; zero or negative expires on the next loop turn.
        receiver: Bound as the first positional argument of ``fn`` (its
            ``self``). Omit for no binding; ``None`` is a valid receiver.
            Pass the unbound function (``Client.fetch``), not a bound
            method (``client.fetch``), which already carries its ``self``.
        operation: Name reported in ``DeadlineExceeded``. Defaults to the
            qualified name of ``fn``.

    Returns:
        A function taking the same arguments as ``fn`` (less the receiver)
        and returning an ``asyncio.Future`` that:

        - resolves with ``fn``'s result if it succeeds in time,
        - fails with ``fn``'s own exception, unchanged, if it fails in time,
        - fails with ``DeadlineExceeded`` if the deadline passes first.
    """
    name = operation or _describe(fn)

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> asyncio.Future[T]:
        loop = asyncio.get_running_loop()
        started = loop.time()
        result: asyncio.Future[T] = loop.create_future()

        timer = loop.call_later(
            deadline_ms / 1000, _expire, result, name, deadline_ms, started
        )
        result.add_done_callback(lambda _: timer.cancel())

        task = loop.create_task(_invoke(fn, receiver, args, kwargs))
        _running_calls.add(task)
        task.add_done_callback(_running_calls.discard)
        task.add_done_callback(functools.partial(_settle, result, name))
        return result

    return wrapper


async def _invoke(
    fn: Callable[..., Any],
    receiver: Any,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    if receiver is not UNBOUND:
        args = (receiver, *args)
    value = fn(*args, **kwargs)
    if inspect.isawaitable(value):
        value = await value
    return value


def _expire(
    result: asyncio.Future[Any],
    operation: str,
    deadline_ms: float,
    started: float,
) -> None:
    """Timer callback: reject the pending result with DeadlineExceeded."""
    if result.done():
        return

    elapsed_ms = (result.get_loop().time() - started) * 1000
    logger.debug(f"Deadline of {deadline_ms}ms exceeded by {operation}")
    result.set_exception(
        DeadlineExceeded(
            operation=operation,
            deadline_ms=deadline_ms,
            elapsed_ms=elapsed_ms,
        )
    )


def _settle(result: asyncio.Future[Any], operation: str, task: asyncio.Task[Any]) -> None:
    """Completion callback: copy the call's outcome onto the pending result."""
    if result.done():
        _discard_late_outcome(task, operation)
        return

    if task.cancelled():
        result.cancel()
        return

    error = task.exception()
    if error is not None:
        result.set_exception(error)
    else:
        result.set_result(task.result())


def _discard_late_outcome(task: asyncio.Task[Any], operation: str) -> None:
    # Retrieving the exception keeps asyncio from reporting it as unhandled.
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug(f"Discarding late failure from {operation}: {error!r}")
    else:
        logger.debug(f"Discarding late result from {operation}")


def _describe(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
