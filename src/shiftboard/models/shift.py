"""Shift type definitions."""
from datetime import time
from enum import Enum
from typing import List


class ShiftType(str, Enum):
    """Shift types in display order."""
    EARLY = "early"  # 09:30-18:30
    MID = "mid"      # 11:00-20:00
    LATE = "late"    # 12:30-21:30

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def start(self) -> time:
        return _RANGES[self][0]

    @property
    def end(self) -> time:
        return _RANGES[self][1]

    @property
    def hours(self) -> float:
        """Nominal duration. Informational only, load is a slot count."""
        start, end = _RANGES[self]
        return (end.hour * 60 + end.minute - start.hour * 60 - start.minute) / 60

    @property
    def order(self) -> int:
        """Position in display order."""
        return SHIFT_ORDER.index(self)

    @classmethod
    def from_string(cls, s) -> "ShiftType":
        """Parse shift from its value, name or a common alias."""
        if isinstance(s, cls):
            return s
        key = str(s).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown shift type: {s!r}")


_RANGES = {
    ShiftType.EARLY: (time(9, 30), time(18, 30)),
    ShiftType.MID: (time(11, 0), time(20, 0)),
    ShiftType.LATE: (time(12, 30), time(21, 30)),
}

_LABELS = {
    ShiftType.EARLY: "Early (09:30-18:30)",
    ShiftType.MID: "Mid (11:00-20:00)",
    ShiftType.LATE: "Late (12:30-21:30)",
}

_ALIASES = {
    "e": ShiftType.EARLY, "morning": ShiftType.EARLY, "am": ShiftType.EARLY,
    "m": ShiftType.MID, "middle": ShiftType.MID, "midday": ShiftType.MID,
    "l": ShiftType.LATE, "evening": ShiftType.LATE, "pm": ShiftType.LATE,
}

SHIFT_ORDER: List[ShiftType] = [ShiftType.EARLY, ShiftType.MID, ShiftType.LATE]


def parse_shift_types(codes) -> List[ShiftType]:
    """Parse a list of shift codes, keeping the canonical display order."""
    wanted = {ShiftType.from_string(c) for c in codes}
    return [s for s in SHIFT_ORDER if s in wanted]
