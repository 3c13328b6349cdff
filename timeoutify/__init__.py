"""
timeoutify: give any asynchronous call a deadline.

Basic Usage:
    >>> from timeoutify import timeoutify, DeadlineExceeded
    >>>
    >>> # Each call to the wrapped function races a 5 second timer
    >>> timed_fetch = timeoutify(fetch, 5000)
    >>> try:
    ...     body = await timed_fetch("https://example.com")
    ... except DeadlineExceeded:
    ...     body = None
    >>>
    >>> # Bind a receiver (passed to the function as ``self``)
    >>> timed_get = timeoutify(Client.get, 1000, client)
    >>>
    >>> # Or decorate
    >>> @with_deadline(2000)
    ... async def lookup(key):
    ...     return await store.get(key)
"""

__version__ = "1.0.0"

from timeoutify.config import (
    DeadlineConfig,
    get_default_config,
    set_default_config,
)
from timeoutify.core import UNBOUND, timeoutify
from timeoutify.decorators import with_deadline
from timeoutify.exceptions import (
    DEADLINE_EXCEEDED_MESSAGE,
    DeadlineExceeded,
    TimeoutifyError,
)

__all__ = [
    "__version__",
    # Core
    "timeoutify",
    "UNBOUND",
    # Decorators
    "with_deadline",
    # Configuration
    "DeadlineConfig",
    "get_default_config",
    "set_default_config",
    # Exceptions
    "TimeoutifyError",
    "DeadlineExceeded",
    "DEADLINE_EXCEEDED_MESSAGE",
]
