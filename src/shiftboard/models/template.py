"""Week template models."""
from dataclasses import dataclass, field
from typing import List

from .shift import ShiftType


@dataclass
class TemplateEntry:
    """An assignment keyed by day offset within the week instead of a date."""

    id: str
    offset: int
    shift_type: ShiftType
    worker_ids: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.shift_type, ShiftType):
            self.shift_type = ShiftType.from_string(self.shift_type)
        if not 0 <= int(self.offset) <= 6:
            raise ValueError(f"Template offset must be 0..6, got {self.offset}")
        self.offset = int(self.offset)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "offset": self.offset,
            "shiftType": self.shift_type.value,
            "workerIds": list(self.worker_ids),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "TemplateEntry":
        return cls(
            id=str(d["id"]),
            offset=d["offset"],
            shift_type=d["shiftType"],
            worker_ids=[str(w) for w in d.get("workerIds", [])],
        )


@dataclass
class WeekTemplate:
    """A named, period-independent snapshot of one week of assignments."""

    name: str
    assignments: List[TemplateEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "assignments": [e.to_dict() for e in self.assignments],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "WeekTemplate":
        return cls(
            name=d["name"],
            assignments=[TemplateEntry.from_dict(e) for e in d.get("assignments", [])],
        )
