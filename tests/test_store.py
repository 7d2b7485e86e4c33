"""Tests for AssignmentStore."""
from datetime import date

from shiftboard.core.periods import Period
from shiftboard.models.assignment import Assignment, Slot
from shiftboard.models.config import EngineConfig
from shiftboard.models.shift import ShiftType
from shiftboard.store.assignments import AssignmentStore, dedupe


SLOT = Slot("2024-05-01", "early")


class TestSetWorkers:
    """Tests for the create / update / delete write path."""

    def test_create_assigns_fresh_id(self, store):
        a = store.set_workers(SLOT, ["A"])
        assert a.id == "a1"
        assert store.get(SLOT).worker_ids == ["A"]

    def test_update_keeps_id(self, store):
        store.set_workers(SLOT, ["A"])
        a = store.set_workers(SLOT, ["B", "C"])
        assert a.id == "a1"
        assert store.get(SLOT).worker_ids == ["B", "C"]
        assert len(store) == 1

    def test_empty_list_removes(self, store):
        store.set_workers(SLOT, ["A"])
        assert store.set_workers(SLOT, []) is None
        assert store.get(SLOT) is None
        assert SLOT not in store

    def test_empty_on_absent_slot_is_noop(self, store):
        assert store.set_workers(SLOT, []) is None
        assert len(store) == 0

    def test_duplicates_kept_by_default(self, store):
        store.set_workers(SLOT, ["A", "A"])
        assert store.get(SLOT).worker_ids == ["A", "A"]

    def test_default_construction(self):
        store = AssignmentStore()
        assert store.config.shift_types == [ShiftType.EARLY, ShiftType.MID, ShiftType.LATE]
        assert store.set_workers(SLOT, ["A"]).worker_ids == ["A"]

    def test_dedupe_flag(self, ids):
        store = AssignmentStore(config=EngineConfig(dedupe_worker_ids=True), id_generator=ids)
        store.set_workers(SLOT, ["A", "B", "A"])
        assert store.get(SLOT).worker_ids == ["A", "B"]

    def test_reads_are_copies(self, store):
        store.set_workers(SLOT, ["A"])
        store.get(SLOT).worker_ids.append("B")
        assert store.get(SLOT).worker_ids == ["A"]


class TestListing:
    """Tests for period listings."""

    def test_list_for_period_covers_every_slot(self, store, week):
        store.set_workers(Slot("2024-05-01", "mid"), ["A"])
        pairs = list(store.list_for_period(week))
        assert len(pairs) == 21
        filled = [(s, a) for s, a in pairs if a is not None]
        assert len(filled) == 1
        assert filled[0][0] == Slot("2024-05-01", "mid")

    def test_listing_is_restartable_and_live(self, store, week):
        listing = store.list_for_period(week)
        assert all(a is None for _, a in listing)
        store.set_workers(SLOT, ["A"])
        assert sum(1 for _, a in listing if a) == 1

    def test_assignments_for_period(self, store, week):
        store.set_workers(SLOT, ["A"])
        store.set_workers(Slot("2024-05-10", "early"), ["B"])
        assert [a.slot for a in store.assignments_for_period(week)] == [SLOT]

    def test_assignments_sorted(self, store):
        store.set_workers(Slot("2024-05-02", "early"), ["A"])
        store.set_workers(Slot("2024-05-01", "late"), ["A"])
        store.set_workers(Slot("2024-05-01", "early"), ["A"])
        assert [a.slot.key() for a in store] == ["2024-05-01/early", "2024-05-01/late", "2024-05-02/early"]


class TestBulkOperations:
    """Tests for put, replace_period and records."""

    def test_put_keeps_id(self, store):
        store.put(Assignment(id="x9", slot=SLOT, worker_ids=["A"]))
        assert store.get(SLOT).id == "x9"

    def test_put_empty_removes(self, store):
        store.set_workers(SLOT, ["A"])
        assert store.put(Assignment(id="x9", slot=SLOT, worker_ids=[])) is None
        assert SLOT not in store

    def test_replace_period(self, store, week):
        store.set_workers(SLOT, ["A"])
        outside = Slot("2024-05-10", "late")
        store.set_workers(outside, ["C"])
        installed = store.replace_period(week, [
            Assignment(id="t1", slot=Slot("2024-04-29", "mid"), worker_ids=["B"]),
            Assignment(id="t2", slot=Slot("2024-04-30", "mid"), worker_ids=[]),
        ])
        assert installed == 1
        assert store.get(SLOT) is None
        assert store.get(Slot("2024-04-29", "mid")).worker_ids == ["B"]
        assert store.get(outside).worker_ids == ["C"]

    def test_membership_count(self, store):
        store.set_workers(SLOT, ["A", "B"])
        store.set_workers(Slot("2024-05-01", "late"), ["A"])
        assert store.membership_count() == 3

    def test_records_round_trip(self, store):
        store.set_workers(SLOT, ["A", "B"])
        store.set_workers(Slot("2024-05-02", "late"), ["C"])
        restored = AssignmentStore.from_records(store.to_records())
        assert restored.to_records() == store.to_records()

    def test_from_records_later_wins(self, caplog):
        records = [
            {"id": "1", "slot": {"date": "2024-05-01", "shiftType": "early"}, "workerIds": ["A"]},
            {"id": "2", "slot": {"date": "2024-05-01", "shiftType": "early"}, "workerIds": ["B"]},
        ]
        store = AssignmentStore.from_records(records)
        assert len(store) == 1
        assert store.get(SLOT).id == "2"
        assert "Duplicate record" in caplog.text


def test_dedupe_keeps_first_occurrence():
    assert dedupe(["B", "A", "B", "C", "A"]) == ["B", "A", "C"]


def test_list_for_period_respects_configured_shifts(ids):
    config = EngineConfig(shift_types=["early", "late"])
    store = AssignmentStore(config=config, id_generator=ids)
    pairs = list(store.list_for_period(Period.week(date(2024, 4, 28))))
    assert len(pairs) == 14
    assert all(slot.shift_type is not ShiftType.MID for slot, _ in pairs)
