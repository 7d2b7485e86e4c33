"""
Workload Statistics and Tables
==============================
Single source of truth for per-worker load tables and the date × shift
board. Used by the CLI and any other presentation layer.
"""
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from shiftboard.models.assignment import Assignment, Slot
from shiftboard.models.shift import SHIFT_ORDER
from shiftboard.models.worker import Roster

from .allocation import compute_load

SHIFT_COLUMNS = [s.value for s in SHIFT_ORDER]


def workload_table(assignments: Iterable[Assignment], roster: Roster) -> pd.DataFrame:
    """
    Per-worker slot counts by shift type.

    Roster workers come first in roster order; ids found only in assignments
    (removed workers) follow, named by their raw id. ``total`` equals the
    worker's load.
    """
    assignments = list(assignments)
    load = compute_load(assignments)

    ids: List[str] = roster.ids()
    ids += sorted(w for w in load if w not in roster)

    rows = {}
    for worker_id in ids:
        worker = roster.get(worker_id)
        rows[worker_id] = {
            "worker_id": worker_id,
            "name": worker.display_name if worker else worker_id,
            "work_id": worker.work_id if worker else "",
            **{col: 0 for col in SHIFT_COLUMNS},
            "total": load.get(worker_id, 0),
        }

    for a in assignments:
        for worker_id in set(a.worker_ids):
            rows[worker_id][a.shift_type.value] += 1

    columns = ["worker_id", "name", "work_id"] + SHIFT_COLUMNS + ["total"]
    return pd.DataFrame(list(rows.values()), columns=columns)


def period_matrix(listing: Iterable[Tuple[Slot, Optional[Assignment]]], roster: Roster) -> pd.DataFrame:
    """
    Date × shift grid of display names, one row per date.

    Args:
        listing: ``(slot, assignment or None)`` pairs, e.g. from
            ``AssignmentStore.list_for_period``
        roster: Name lookup
    """
    cells = {}
    shifts = []
    for slot, a in listing:
        if slot.shift_type.value not in shifts:
            shifts.append(slot.shift_type.value)
        names = ", ".join(roster.display_name(w) for w in a.worker_ids) if a else ""
        cells.setdefault(slot.date.isoformat(), {})[slot.shift_type.value] = names

    df = pd.DataFrame.from_dict(cells, orient="index", columns=shifts)
    df.index.name = "date"
    return df.fillna("")
