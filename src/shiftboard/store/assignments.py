"""
Assignment Store
================
Authoritative mapping from slot to assignment.

Invariants:
    - at most one assignment per (date, shift type)
    - no stored assignment has an empty worker list
    - an assignment keeps its id across updates
"""
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from shiftboard.core.clock import IdGenerator, TimestampIdGenerator
from shiftboard.core.periods import Period, SlotIndex
from shiftboard.models.assignment import Assignment, Slot
from shiftboard.models.config import EngineConfig
from shiftboard.utils.logging_setup import TRACE, get_logger

logger = get_logger("shiftboard.store.assignments")


def dedupe(worker_ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping first occurrences in order."""
    seen = set()
    out = []
    for w in worker_ids:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


class PeriodListing:
    """Lazy, restartable ``(slot, assignment or None)`` pairs for a period."""

    def __init__(self, store: "AssignmentStore", index: SlotIndex):
        self._store = store
        self.index = index

    @property
    def period(self) -> Period:
        return self.index.period

    def __iter__(self) -> Iterator[Tuple[Slot, Optional[Assignment]]]:
        for slot in self.index:
            yield slot, self._store.get(slot)

    def __len__(self) -> int:
        return len(self.index)


class AssignmentStore:
    """
    Holds every assignment, keyed by slot.

    Reads return copies, so callers cannot break the invariants by mutating
    what they get back. All writes go through ``set_workers``, ``put`` and
    ``remove``.
    """

    def __init__(
        self,
        assignments: Iterable[Assignment] = (),
        config: Optional[EngineConfig] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.config = config or EngineConfig()
        self.id_generator = id_generator or TimestampIdGenerator()
        self._by_slot: Dict[Slot, Assignment] = {}
        for a in assignments:
            self.put(a)

    def __len__(self) -> int:
        return len(self._by_slot)

    def __contains__(self, slot) -> bool:
        return slot in self._by_slot

    def __iter__(self) -> Iterator[Assignment]:
        return iter(self.assignments())

    def get(self, slot: Slot) -> Optional[Assignment]:
        """Assignment for a slot, or None. No side effects."""
        a = self._by_slot.get(slot)
        return a.copy() if a else None

    def set_workers(self, slot: Slot, worker_ids: Sequence[str]) -> Optional[Assignment]:
        """
        Replace the full worker list of a slot.

        An empty list deletes the assignment. Otherwise the assignment is
        created with a fresh id or updated in place, keeping its id.
        Duplicates are kept unless ``config.dedupe_worker_ids`` is set.

        Returns:
            The stored assignment, or None when the slot is now empty
        """
        worker_ids = [str(w) for w in worker_ids]
        if self.config.dedupe_worker_ids:
            worker_ids = dedupe(worker_ids)

        if not worker_ids:
            self.remove(slot)
            return None

        existing = self._by_slot.get(slot)
        if existing:
            existing.worker_ids = worker_ids
            logger.log(TRACE, f"Updated {existing!r}")
        else:
            existing = Assignment(id=self.id_generator.next_id(), slot=slot, worker_ids=worker_ids)
            self._by_slot[slot] = existing
            logger.log(TRACE, f"Created {existing!r}")
        return existing.copy()

    def put(self, assignment: Assignment) -> Optional[Assignment]:
        """Install a record as given, keeping its id and replacing whatever held its slot."""
        worker_ids = list(assignment.worker_ids)
        if self.config.dedupe_worker_ids:
            worker_ids = dedupe(worker_ids)
        if not worker_ids:
            self.remove(assignment.slot)
            return None
        stored = Assignment(id=assignment.id, slot=assignment.slot, worker_ids=worker_ids)
        self._by_slot[assignment.slot] = stored
        return stored.copy()

    def remove(self, slot: Slot) -> Optional[Assignment]:
        removed = self._by_slot.pop(slot, None)
        if removed:
            logger.log(TRACE, f"Removed {removed!r}")
        return removed

    def list_for_period(self, period: Period) -> PeriodListing:
        """Every slot of the period paired with its assignment or None."""
        return PeriodListing(self, SlotIndex(period, self.config.shift_types))

    def assignments(self) -> List[Assignment]:
        """All assignments, ordered by slot."""
        return [self._by_slot[s].copy() for s in sorted(self._by_slot, key=Slot.sort_key)]

    def assignments_for_period(self, period: Period) -> List[Assignment]:
        return [a for a in self.assignments() if period.contains(a.date)]

    def replace_period(self, period: Period, assignments: Iterable[Assignment]) -> int:
        """
        Drop every assignment dated inside the period, then install the given ones.

        Returns:
            Number of assignments installed
        """
        for slot in [s for s in self._by_slot if period.contains(s.date)]:
            self.remove(slot)
        installed = 0
        for a in assignments:
            if self.put(a) is not None:
                installed += 1
        return installed

    def membership_count(self) -> int:
        """Total (slot, worker id) pairs across the store."""
        return sum(len(a.worker_ids) for a in self._by_slot.values())

    def to_records(self) -> List[dict]:
        return [a.to_dict() for a in self.assignments()]

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict],
        config: Optional[EngineConfig] = None,
        id_generator: Optional[IdGenerator] = None,
    ) -> "AssignmentStore":
        """
        Rebuild a store from serialized records.

        Later records win when two share a slot.
        """
        store = cls(config=config, id_generator=id_generator)
        for record in records:
            a = Assignment.from_dict(record)
            if a.slot in store:
                logger.warning(f"Duplicate record for {a.slot!r}; keeping the later one ({a.id})")
            store.put(a)
        return store
