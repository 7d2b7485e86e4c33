"""
Periods and Slot Enumeration
============================
A period is a week (7 consecutive days from a start date) or a calendar
month. SlotIndex enumerates every addressable slot of a period, ordered by
date then shift order.
"""
import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional

from shiftboard.models.assignment import Slot, parse_date
from shiftboard.models.config import SUNDAY
from shiftboard.models.shift import SHIFT_ORDER, ShiftType

WEEK = "week"
MONTH = "month"


def week_start_for(day: date, week_starts_on: int = SUNDAY) -> date:
    """First day of the week containing ``day``."""
    return day - timedelta(days=(day.weekday() - week_starts_on) % 7)


@dataclass(frozen=True)
class Period:
    """A contiguous range of dates, inclusive on both ends."""

    kind: str
    start: date
    end: date

    @classmethod
    def week(cls, start) -> "Period":
        start = parse_date(start)
        return cls(kind=WEEK, start=start, end=start + timedelta(days=6))

    @classmethod
    def month(cls, year: int, month: int) -> "Period":
        last = calendar.monthrange(year, month)[1]
        return cls(kind=MONTH, start=date(year, month, 1), end=date(year, month, last))

    @classmethod
    def current_week(cls, today: date, week_starts_on: int = SUNDAY) -> "Period":
        return cls.week(week_start_for(today, week_starts_on))

    @classmethod
    def current_month(cls, today: date) -> "Period":
        return cls.month(today.year, today.month)

    @classmethod
    def parse(cls, text: str, week_starts_on: int = SUNDAY) -> "Period":
        """``YYYY-MM`` is a month; ``YYYY-MM-DD`` is the week containing that day."""
        text = text.strip()
        if len(text) == 7:
            year, month = text.split("-")
            return cls.month(int(year), int(month))
        return cls.week(week_start_for(parse_date(text), week_starts_on))

    @property
    def label(self) -> str:
        if self.kind == MONTH:
            return self.start.strftime("%Y-%m")
        return f"week of {self.start.isoformat()}"

    def dates(self) -> List[date]:
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


class SlotIndex:
    """
    Every slot of a period, date ascending then shift order.

    Iterable and restartable: each ``iter()`` starts a fresh enumeration.
    """

    def __init__(self, period: Period, shift_types: Optional[Iterable[ShiftType]] = None):
        self.period = period
        wanted = set(shift_types) if shift_types is not None else set(SHIFT_ORDER)
        self.shift_types = [s for s in SHIFT_ORDER if s in wanted]

    def __iter__(self) -> Iterator[Slot]:
        for day in self.period.dates():
            for shift in self.shift_types:
                yield Slot(date=day, shift_type=shift)

    def __len__(self) -> int:
        return len(self.period.dates()) * len(self.shift_types)

    def __contains__(self, slot) -> bool:
        return (
            isinstance(slot, Slot)
            and self.period.contains(slot.date)
            and slot.shift_type in self.shift_types
        )

    def __repr__(self):
        return f"SlotIndex({self.period.label}, {len(self)} slots)"
