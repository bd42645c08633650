"""Per-thread marker for code running inside a log write.

Libraries called during a write (the ClickHouse driver logs connection
and block events) may emit records that a logging handler would route
straight back into the same writer. Handlers check ``in_write()`` and
drop such records.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

_state = threading.local()


def in_write() -> bool:
    """Return True if the current thread is inside a log write."""
    return getattr(_state, "depth", 0) > 0


@contextmanager
def writing() -> Iterator[None]:
    """Mark the current thread as inside a log write."""
    _state.depth = getattr(_state, "depth", 0) + 1
    try:
        yield
    finally:
        _state.depth -= 1
