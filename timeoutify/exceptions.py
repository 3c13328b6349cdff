"""
Custom exceptions for timeoutify.

Failures raised by the wrapped callable are never wrapped or re-typed;
only the deadline itself produces an exception from this package.
"""

from __future__ import annotations

from typing import Any

DEADLINE_EXCEEDED_MESSAGE = "Function call did not resolve within the allotted time."


class TimeoutifyError(Exception):
    """
    Base exception for all timeoutify errors.

    Attributes:
        message: Human-readable error description.
        details: Context appended to the message as ``key=value`` pairs.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        parts.extend(f"{key}={value}" for key, value in self.details.items())
        return " ".join(parts)


class DeadlineExceeded(TimeoutifyError, TimeoutError):
    """
    Raised when a wrapped call does not settle before its deadline.

    Also a builtin ``TimeoutError``, so ``except TimeoutError`` catches it.

    Attributes:
        operation: Name of the call that overran.
        deadline_ms: The deadline that was exceeded, in milliseconds.
        elapsed_ms: Time from invocation until the deadline fired.

    Example:
        >>> try:
        ...     await timeoutify(fetch, 5000)("https://example.com")
        ... except DeadlineExceeded as e:
        ...     logger.warning(f"{e.operation} gave up after {e.elapsed_ms:.0f}ms")
    """

    def __init__(
        self,
        message: str = DEADLINE_EXCEEDED_MESSAGE,
        operation: str | None = None,
        deadline_ms: float | None = None,
        elapsed_ms: float | None = None,
    ) -> None:
        self.operation = operation
        self.deadline_ms = deadline_ms
        self.elapsed_ms = elapsed_ms

        details: dict[str, Any] = {}
        if operation:
            details["operation"] = operation
        if deadline_ms is not None:
            details["deadline_ms"] = deadline_ms
        if elapsed_ms is not None:
            details["elapsed_ms"] = round(elapsed_ms, 2)
        super().__init__(message, details)
