"""
Pytest fixtures for timeoutify tests.

Durations are scaled down from seconds to fractions of a second; the
ratios between deadline, completion and overrun are kept.
"""

from __future__ import annotations

import asyncio
from collections.abc import Generator
from typing import Any

import pytest
import pytest_asyncio

from timeoutify import core
from timeoutify.config import DeadlineConfig, set_default_config

# ============================================================================
# Timing
# ============================================================================

DEADLINE_MS = 200.0
COMPLETION_S = 0.05
OVERRUN_S = 0.4


# ============================================================================
# Callables
# ============================================================================


class Recorder:
    """Async callable that records its calls and settles after a delay."""

    def __init__(
        self,
        delay: float = COMPLETION_S,
        result: Any = "Complete",
        error: BaseException | None = None,
    ) -> None:
        self.delay = delay
        self.result = result
        self.error = error
        self.calls: list[tuple[Any, ...]] = []
        self.kwargs: list[dict[str, Any]] = []
        self.finished = asyncio.Event()

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        self.calls.append(args)
        self.kwargs.append(kwargs)
        try:
            await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return self.result
        finally:
            self.finished.set()


@pytest.fixture
def completing() -> Recorder:
    """Callable that resolves well within the deadline."""
    return Recorder(delay=COMPLETION_S)


@pytest.fixture
def overrunning() -> Recorder:
    """Callable that resolves well after the deadline."""
    return Recorder(delay=OVERRUN_S)


# ============================================================================
# Timers
# ============================================================================


@pytest_asyncio.fixture
async def deadline_timers(monkeypatch: pytest.MonkeyPatch) -> list[asyncio.TimerHandle]:
    """Collect the deadline timers armed on the running loop."""
    loop = asyncio.get_running_loop()
    original = loop.call_later
    handles: list[asyncio.TimerHandle] = []

    def call_later(delay: float, callback: Any, *args: Any, **kwargs: Any) -> asyncio.TimerHandle:
        handle = original(delay, callback, *args, **kwargs)
        if callback is core._expire:
            handles.append(handle)
        return handle

    monkeypatch.setattr(loop, "call_later", call_later)
    return handles


# ============================================================================
# Configuration
# ============================================================================


@pytest.fixture
def default_config() -> Generator[DeadlineConfig, None, None]:
    """Install a fresh process-wide config for the duration of a test."""
    config = DeadlineConfig(default_deadline_ms=DEADLINE_MS)
    set_default_config(config)
    yield config
    set_default_config(DeadlineConfig())
