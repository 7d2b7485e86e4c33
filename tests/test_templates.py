"""Tests for week template capture and apply."""
from datetime import date

import pytest

from shiftboard.core.errors import UnknownTemplate
from shiftboard.core.periods import Period
from shiftboard.engine.templates import TemplateManager
from shiftboard.models.assignment import Assignment, Slot


def as_pairs(assignments):
    return sorted((a.slot.key(), tuple(a.worker_ids)) for a in assignments)


@pytest.fixture
def manager(ids):
    return TemplateManager(id_generator=ids)


@pytest.fixture
def filled_week(store, engine, week):
    engine.merge(engine.suggest_for(week))
    store.set_workers(Slot("2024-05-01", "mid"), ["A", "B"])
    return store.assignments_for_period(week)


class TestCapture:
    """Tests for snapshotting a week."""

    def test_offsets_from_week_start(self, manager, week):
        template = manager.capture("std", [
            Assignment("x", Slot("2024-04-28", "early"), ["A"]),
            Assignment("y", Slot("2024-05-04", "late"), ["B"]),
        ], week.start)
        assert [(e.offset, e.shift_type.value) for e in template.assignments] == [(0, "early"), (6, "late")]

    def test_outside_week_skipped(self, manager, week, caplog):
        template = manager.capture("std", [
            Assignment("x", Slot("2024-05-05", "early"), ["A"]),
            Assignment("y", Slot("2024-05-01", "early"), []),
        ], week.start)
        assert template.assignments == []
        assert "outside week" in caplog.text

    def test_last_write_wins(self, manager, week):
        manager.capture("std", [Assignment("x", Slot("2024-04-28", "early"), ["A"])], week.start)
        manager.capture("std", [], week.start)
        assert len(manager) == 1
        assert manager.get("std").assignments == []

    def test_empty_name_rejected(self, manager, week):
        with pytest.raises(ValueError):
            manager.capture("  ", [], week.start)


class TestApply:
    """Tests for materializing templates."""

    def test_round_trip_same_week(self, manager, filled_week, week):
        manager.capture("std", filled_week, week.start)
        applied = manager.apply("std", week.start)
        assert as_pairs(applied) == as_pairs(filled_week)

    def test_apply_to_other_week_shifts_dates(self, manager, filled_week, week):
        manager.capture("std", filled_week, week.start)
        applied = manager.apply("std", date(2024, 5, 5))
        assert len(applied) == len(filled_week)
        assert min(a.date for a in applied) == date(2024, 5, 5)
        assert max(a.date for a in applied) == date(2024, 5, 11)

    def test_apply_gives_fresh_ids(self, manager, filled_week, week):
        manager.capture("std", filled_week, week.start)
        applied = manager.apply("std", week.start)
        assert not {a.id for a in applied} & {a.id for a in filled_week}

    def test_unknown_name_is_absent(self, manager, week):
        assert manager.apply("nope", week.start) is None

    def test_install_replaces_target_week(self, manager, store, filled_week, week):
        manager.capture("std", filled_week, week.start)
        store.set_workers(Slot("2024-05-07", "late"), ["C"])
        manager.install("std", date(2024, 5, 5), store)
        next_week = store.assignments_for_period(Period.week(date(2024, 5, 5)))
        assert len(next_week) == len(filled_week)
        assert store.get(Slot("2024-05-08", "mid")).worker_ids == ["A", "B"]

    def test_install_unknown_leaves_store(self, manager, store, week):
        store.set_workers(Slot("2024-05-01", "late"), ["C"])
        assert manager.install("nope", week.start, store) is None
        assert len(store) == 1


class TestManagement:
    """Tests for lookup, delete and serialization."""

    def test_require_and_delete(self, manager, week):
        manager.capture("std", [], week.start)
        assert manager.require("std").name == "std"
        manager.delete("std")
        assert "std" not in manager
        with pytest.raises(UnknownTemplate, match="std"):
            manager.delete("std")

    def test_dict_round_trip(self, manager, filled_week, week, ids):
        manager.capture("std", filled_week, week.start)
        restored = TemplateManager.from_dict(manager.to_dict(), id_generator=ids)
        assert restored.names() == ["std"]
        assert restored.to_dict() == manager.to_dict()
