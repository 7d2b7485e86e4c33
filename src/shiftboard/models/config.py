"""Engine configuration."""
from dataclasses import dataclass, field
from typing import Dict, List

from .shift import SHIFT_ORDER, ShiftType, parse_shift_types

SUNDAY = 6  # datetime.date.weekday() numbering


@dataclass
class EngineConfig:
    """Configuration for the allocation engine and its workspace."""

    # Store behavior
    dedupe_worker_ids: bool = False  # If True, set_workers drops repeated ids in a slot

    # Periods
    week_starts_on: int = SUNDAY  # 0=Monday .. 6=Sunday
    shift_types: List[ShiftType] = field(default_factory=lambda: list(SHIFT_ORDER))

    # Persistence
    workers_key: str = "workers"
    assignments_key: str = "assignments"
    templates_key: str = "weeklyTemplates"

    def __post_init__(self):
        self.shift_types = parse_shift_types(self.shift_types)
        if not self.shift_types:
            raise ValueError("At least one shift type is required")
        if not 0 <= self.week_starts_on <= 6:
            raise ValueError(f"week_starts_on must be 0..6, got {self.week_starts_on}")

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "dedupe_worker_ids": self.dedupe_worker_ids,
            "week_starts_on": self.week_starts_on,
            "shift_types": [s.value for s in self.shift_types],
            "workers_key": self.workers_key,
            "assignments_key": self.assignments_key,
            "templates_key": self.templates_key,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "EngineConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = set(cls().to_dict())
        return cls(**{k: v for k, v in d.items() if k in known})
