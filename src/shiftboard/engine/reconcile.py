"""Opt-in cleanup of worker ids left behind by roster deletions."""
from typing import Dict, List, Optional

from shiftboard.core.periods import Period
from shiftboard.models.assignment import Slot
from shiftboard.models.worker import Roster
from shiftboard.store.assignments import AssignmentStore
from shiftboard.utils.logging_setup import get_logger

logger = get_logger("shiftboard.engine.reconcile")


def find_orphans(store: AssignmentStore, roster: Roster, period: Optional[Period] = None) -> Dict[Slot, List[str]]:
    """Slots holding ids that are no longer on the roster."""
    assignments = store.assignments() if period is None else store.assignments_for_period(period)
    orphans = {}
    for a in assignments:
        missing = [w for w in a.worker_ids if w not in roster]
        if missing:
            orphans[a.slot] = missing
    return orphans


def reconcile_orphans(store: AssignmentStore, roster: Roster, period: Optional[Period] = None) -> Dict[Slot, List[str]]:
    """
    Strip orphan ids from assignments; slots left empty are deleted.

    Returns:
        The ids removed, per slot
    """
    orphans = find_orphans(store, roster, period)
    for slot in orphans:
        current = store.get(slot)
        store.set_workers(slot, [w for w in current.worker_ids if w in roster])
    if orphans:
        logger.info(f"Removed orphan ids from {len(orphans)} slots")
    return orphans
