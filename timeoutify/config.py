"""
Deadline configuration.

Holds default and per-operation deadlines for the ``with_deadline``
decorator. ``timeoutify()`` itself always takes an explicit deadline.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class DeadlineConfig:
    """
    Configuration for deadline lookup.

    Attributes:
        default_deadline_ms: Deadline for operations without an override.
        operation_deadlines: Per-operation deadline overrides, in milliseconds.

    Example:
        >>> config = DeadlineConfig(
        ...     default_deadline_ms=5000.0,
        ...     operation_deadlines={
        ...         "fetch_page": 10000.0,
        ...         "read_cache": 250.0,
        ...     },
        ... )
    """

    default_deadline_ms: float = 30000.0
    operation_deadlines: dict[str, float] = field(default_factory=dict)

    def get_deadline(self, operation: str) -> float:
        """
        Get the deadline for an operation.

        Args:
            operation: Name of the operation.

        Returns:
            Deadline in milliseconds.
        """
        return self.operation_deadlines.get(operation, self.default_deadline_ms)

    def set_operation_deadline(self, operation: str, deadline_ms: float) -> None:
        """Override the deadline for one operation."""
        self.operation_deadlines[operation] = deadline_ms

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "default_deadline_ms": self.default_deadline_ms,
            "operation_deadlines": dict(self.operation_deadlines),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeadlineConfig:
        """Create config from dictionary."""
        return cls(
            default_deadline_ms=data.get("default_deadline_ms", 30000.0),
            operation_deadlines=dict(data.get("operation_deadlines", {})),
        )


_default_config: DeadlineConfig | None = None
_config_lock = threading.Lock()


def get_default_config() -> DeadlineConfig:
    """
    Get the process-wide deadline configuration.

    Creates one with default settings if none exists.
    """
    global _default_config
    with _config_lock:
        if _default_config is None:
            _default_config = DeadlineConfig()
        return _default_config


def set_default_config(config: DeadlineConfig) -> None:
    """Replace the process-wide deadline configuration."""
    global _default_config
    with _config_lock:
        _default_config = config
