"""Slot and assignment models."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Tuple, Union

from .shift import ShiftType


def parse_date(value: Union[str, date]) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


@dataclass(frozen=True)
class Slot:
    """An addressable (date, shift type) unit of work."""

    date: date
    shift_type: ShiftType

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        if not isinstance(self.shift_type, ShiftType):
            object.__setattr__(self, "shift_type", ShiftType.from_string(self.shift_type))

    def sort_key(self) -> Tuple[date, int]:
        return (self.date, self.shift_type.order)

    def key(self) -> str:
        return f"{self.date.isoformat()}/{self.shift_type.value}"

    def __repr__(self):
        return f"Slot({self.date.isoformat()} {self.shift_type.value})"

    def to_dict(self) -> dict:
        return {"date": self.date.isoformat(), "shiftType": self.shift_type.value}

    @classmethod
    def from_dict(cls, d: dict) -> "Slot":
        return cls(date=d["date"], shift_type=d["shiftType"])


@dataclass
class Assignment:
    """The workers placed in one slot. Order of ``worker_ids`` is for display only."""

    id: str
    slot: Slot
    worker_ids: List[str] = field(default_factory=list)

    @property
    def date(self) -> date:
        return self.slot.date

    @property
    def shift_type(self) -> ShiftType:
        return self.slot.shift_type

    def copy(self) -> "Assignment":
        return Assignment(id=self.id, slot=self.slot, worker_ids=list(self.worker_ids))

    def __repr__(self):
        return f"Assignment({self.id}: {self.slot!r} {self.worker_ids})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slot": self.slot.to_dict(),
            "workerIds": list(self.worker_ids),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Assignment":
        return cls(
            id=str(d["id"]),
            slot=Slot.from_dict(d["slot"]),
            worker_ids=[str(w) for w in d.get("workerIds", [])],
        )
