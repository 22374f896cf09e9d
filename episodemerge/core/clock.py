"""
Central time source for episodemerge.
Provides the local, timezone-aware time used in generated headers.
Thread-safe and async-safe via contextvars.

Tests freeze it with clock.frozen().
"""
import datetime
import contextlib
from typing import Optional, Generator
from contextvars import ContextVar

# ContextVar for thread/task-local storage of frozen time
_frozen_time_var: ContextVar[Optional[datetime.datetime]] = ContextVar("frozen_time", default=None)


def now_local() -> datetime.datetime:
    """
    Returns the current time in the local time zone.
    If time is frozen (via the `frozen` context), returns the frozen time.
    """
    frozen_dt = _frozen_time_var.get()
    if frozen_dt:
        return frozen_dt
    return datetime.datetime.now().astimezone()


def _require_aware(dt: datetime.datetime) -> None:
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError("Frozen time must be timezone-aware")


@contextlib.contextmanager
def frozen(dt: datetime.datetime) -> Generator[None, None, None]:
    """
    Context manager to freeze time for a block.
    Restores the previous time state upon exit.
    """
    _require_aware(dt)
    token = _frozen_time_var.set(dt)
    try:
        yield
    finally:
        _frozen_time_var.reset(token)
