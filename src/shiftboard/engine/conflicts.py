"""
Conflict Detection
==================
Advisory double-booking check. Pure functions: nothing here blocks a write,
and nothing calls it automatically.

The one conflict class: a worker appearing in more than one assignment on
the same date.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from shiftboard.models.assignment import Assignment, parse_date
from shiftboard.models.shift import ShiftType
from shiftboard.utils.logging_setup import get_logger

logger = get_logger("shiftboard.engine.conflicts")

Entry = Union[Assignment, Tuple[Union[str, date], Union[str, ShiftType], Sequence[str]]]


@dataclass
class Conflict:
    """A worker booked into several shifts on one date."""
    date: date
    worker_id: str
    shift_types: List[ShiftType] = field(default_factory=list)
    message: str = ""


def _normalize(entries: Iterable[Entry]) -> List[Tuple[date, ShiftType, List[str]]]:
    rows = []
    for e in entries:
        if isinstance(e, Assignment):
            rows.append((e.date, e.shift_type, list(e.worker_ids)))
        else:
            day, shift, worker_ids = e
            if not isinstance(shift, ShiftType):
                shift = ShiftType.from_string(shift)
            rows.append((parse_date(day), shift, list(worker_ids)))
    # Stable sort: entries sharing a slot keep their input order
    rows.sort(key=lambda r: (r[0], r[1].order))
    return rows


def find_conflicts(entries: Iterable[Entry], names: Optional[Mapping[str, str]] = None) -> List[Conflict]:
    """
    Find workers booked more than once on the same date.

    Args:
        entries: Assignments or ``(date, shift_type, worker_ids)`` triples
        names: Optional worker id -> display name lookup for messages

    Returns:
        One Conflict per (date, worker), ordered by date, then by the first
        slot the worker appears in, then by position in that slot
    """
    names = names or {}
    per_day: Dict[date, Dict[str, List[ShiftType]]] = defaultdict(dict)

    for day, shift, worker_ids in _normalize(entries):
        seen_in_entry = set()
        for worker_id in worker_ids:
            # Repeats inside one assignment are not a cross-shift conflict
            if worker_id in seen_in_entry:
                continue
            seen_in_entry.add(worker_id)
            per_day[day].setdefault(worker_id, []).append(shift)

    conflicts = []
    for day in sorted(per_day):
        for worker_id, shifts in per_day[day].items():
            if len(shifts) < 2:
                continue
            who = names.get(worker_id, worker_id)
            labels = ", ".join(s.value for s in shifts)
            conflicts.append(Conflict(
                date=day,
                worker_id=worker_id,
                shift_types=shifts,
                message=f"{who} is double-booked on {day.isoformat()} ({labels})",
            ))

    if conflicts:
        logger.debug(f"Found {len(conflicts)} double bookings")
    return conflicts


def detect_conflicts(entries: Iterable[Entry], names: Optional[Mapping[str, str]] = None) -> List[str]:
    """Warning strings, one per double booking, in slot order."""
    return [c.message for c in find_conflicts(entries, names)]
