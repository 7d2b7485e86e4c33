"""
Allocation Engine
=================
Workload-balanced suggestions and the manual move protocol.

Load is a plain slot count: shift types differ in nominal hours but every
occupied slot weighs 1.

Suggestion algorithm (greedy, online):
    - count the load of every worker in the current assignments
    - walk the period's slots in order (date, then shift)
    - every open slot gets the least-loaded worker, ties broken by roster order
    - the chosen worker's load is bumped before the next slot is considered
"""
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional

from shiftboard.core.errors import InvalidMove
from shiftboard.core.periods import Period, SlotIndex
from shiftboard.models.assignment import Assignment, Slot
from shiftboard.models.worker import Roster
from shiftboard.store.assignments import AssignmentStore
from shiftboard.utils.logging_setup import EngineLogger, get_logger, log_function_call
from shiftboard.utils.structured_logging import get_structured_logger

logger = get_logger("shiftboard.engine.allocation")
elog = EngineLogger("shiftboard.engine.allocation")
events = get_structured_logger("shiftboard.engine.allocation")


def compute_load(assignments: Iterable[Assignment]) -> Counter:
    """
    Number of slots each worker occupies.

    A worker listed twice in one slot still counts once for that slot.
    """
    load = Counter()
    for a in assignments:
        for worker_id in set(a.worker_ids):
            load[worker_id] += 1
    return load


def suggestion_id(slot: Slot) -> str:
    return f"{slot.date.isoformat()}-{slot.shift_type.value}"


@log_function_call
def suggest_assignments(
    period: Period,
    current_assignments: Iterable[Assignment],
    roster: Roster,
    shift_types=None,
) -> List[Assignment]:
    """
    Suggest one worker for every open slot of the period.

    Args:
        period: Week or month to fill
        current_assignments: Assignments the load is computed from
        roster: Candidate workers, in tie-break order
        shift_types: Shift types to enumerate (default: all)

    Returns:
        One single-worker Assignment per open slot that could be filled,
        in slot order. Slots with nobody available are left out.
    """
    current_assignments = list(current_assignments)
    load = compute_load(current_assignments)
    occupied = {a.slot: a for a in current_assignments if a.worker_ids}

    elog.phase(f"Suggesting for {period.label}")
    elog.detail("initial load", dict(load))

    suggestions = []
    for slot in SlotIndex(period, shift_types):
        if slot in occupied:
            continue

        available = list(roster)
        if not available:
            elog.step(f"{slot!r}: nobody available")
            continue

        # min() keeps the first of equal keys, so roster order breaks ties
        pick = min(available, key=lambda w: load[w.id])
        suggestions.append(Assignment(id=suggestion_id(slot), slot=slot, worker_ids=[pick.id]))
        load[pick.id] += 1
        elog.step(f"{slot!r} -> {pick.id} (load now {load[pick.id]})")

    logger.info(f"Suggested {len(suggestions)} assignments for {period.label}")
    return suggestions


@dataclass
class MoveResult:
    """Outcome of a successful move."""
    worker_id: str
    source: Optional[Assignment]  # None when the source slot was emptied
    destination: Assignment


class AllocationEngine:
    """
    Suggestions and moves against one AssignmentStore.

    Usage:
        engine = AllocationEngine(store, roster)
        suggestions = engine.suggest_for(Period.week(date(2024, 4, 28)))
        engine.merge(suggestions)
        engine.move(slot_a, 0, slot_b, 1)
    """

    def __init__(self, store: AssignmentStore, roster: Roster):
        self.store = store
        self.roster = roster

    def load(self, period: Optional[Period] = None) -> Counter:
        """Load per worker within a period, or across the whole store."""
        if period is None:
            return compute_load(self.store.assignments())
        return compute_load(self.store.assignments_for_period(period))

    def suggest(self, period: Period, current_assignments: Iterable[Assignment], roster: Roster) -> List[Assignment]:
        return suggest_assignments(period, current_assignments, roster, self.store.config.shift_types)

    def suggest_for(self, period: Period) -> List[Assignment]:
        """Suggestions for a period using the store's current state and the engine's roster."""
        return self.suggest(period, self.store.assignments_for_period(period), self.roster)

    def merge(self, suggestions: Iterable[Assignment]) -> List[Assignment]:
        """
        Union suggestions into the store.

        A suggestion is installed only if its slot is still open; existing
        assignments are never replaced.

        Returns:
            The suggestions that were installed
        """
        installed = []
        for s in suggestions:
            if s.slot in self.store:
                logger.debug(f"Skipping suggestion for {s.slot!r}: slot already filled")
                continue
            stored = self.store.put(s)
            if stored is not None:
                installed.append(stored)
        events.info("suggestions_merged", installed=len(installed))
        return installed

    def move(self, source_slot: Slot, source_index: int, dest_slot: Slot, dest_index: int) -> MoveResult:
        """
        Relocate one worker from a source slot position to a destination position.

        The worker is removed from the source (deleting it if it empties) and
        inserted at ``dest_index`` in the destination, which is created if
        absent. The destination index is clamped to the list bounds. Moving
        within one slot reorders it.

        Raises:
            InvalidMove: no worker at ``source_slot[source_index]``, or the
                store dedupes and the destination already holds the worker.
                The store is unchanged.
        """
        source = self.store.get(source_slot)
        if source is None:
            raise self._decline(f"No assignment at {source_slot!r}", source_slot, source_index)
        if not 0 <= source_index < len(source.worker_ids):
            raise self._decline(
                f"Index {source_index} out of range for {source_slot!r} ({len(source.worker_ids)} workers)",
                source_slot, source_index,
            )

        worker_id = source.worker_ids[source_index]
        remaining = source.worker_ids[:source_index] + source.worker_ids[source_index + 1:]

        same_slot = dest_slot == source_slot
        if same_slot:
            target = list(remaining)
        else:
            dest = self.store.get(dest_slot)
            target = list(dest.worker_ids) if dest else []
            if self.store.config.dedupe_worker_ids and worker_id in target:
                raise self._decline(f"{worker_id} is already in {dest_slot!r}", source_slot, source_index)

        target.insert(min(max(dest_index, 0), len(target)), worker_id)

        # Both new lists are computed before either write.
        if same_slot:
            destination = self.store.set_workers(dest_slot, target)
            result = MoveResult(worker_id=worker_id, source=destination, destination=destination)
        else:
            new_source = self.store.set_workers(source_slot, remaining)
            destination = self.store.set_workers(dest_slot, target)
            result = MoveResult(worker_id=worker_id, source=new_source, destination=destination)

        logger.debug(f"Moved {worker_id}: {source_slot!r}[{source_index}] -> {dest_slot!r}[{dest_index}]")
        return result

    def _decline(self, message: str, source_slot: Slot, source_index: int) -> InvalidMove:
        logger.warning(f"Move declined: {message}")
        return InvalidMove(message, source_slot=source_slot, source_index=source_index)
