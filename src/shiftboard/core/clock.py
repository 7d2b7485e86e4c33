"""Clock and id generator collaborators."""
import itertools
import time
from datetime import date
from typing import Callable, Optional, Protocol


class Clock(Protocol):
    def today(self) -> date: ...


class IdGenerator(Protocol):
    def next_id(self) -> str: ...


class SystemClock:
    """Local wall-clock date."""

    def today(self) -> date:
        return date.today()


class FixedClock:
    """Clock pinned to one date, for tests and batch runs."""

    def __init__(self, today: date):
        self._today = today

    def today(self) -> date:
        return self._today


class TimestampIdGenerator:
    """
    Millisecond-timestamp ids, strictly increasing.

    Two ids requested within the same millisecond would collide, so the
    generator bumps past the last id it handed out.
    """

    def __init__(self, now_ms: Optional[Callable[[], int]] = None):
        self._now_ms = now_ms or (lambda: time.time_ns() // 1_000_000)
        self._last = 0

    def next_id(self) -> str:
        value = max(self._now_ms(), self._last + 1)
        self._last = value
        return str(value)


class SequentialIdGenerator:
    """Deterministic ids: ``a1``, ``a2``, ..."""

    def __init__(self, prefix: str = "a", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"
