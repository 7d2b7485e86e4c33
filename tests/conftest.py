"""Pytest configuration and fixtures."""
import sys
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from shiftboard.core.clock import FixedClock, SequentialIdGenerator
from shiftboard.core.periods import Period
from shiftboard.engine.allocation import AllocationEngine
from shiftboard.io.persistence import MemoryStore
from shiftboard.models.config import EngineConfig
from shiftboard.models.worker import Roster, Worker
from shiftboard.store.assignments import AssignmentStore
from shiftboard.workspace import Workspace


@pytest.fixture
def roster():
    """Three workers in a fixed tie-break order."""
    return Roster([
        Worker(id="A", display_name="Alice", work_id="W-001"),
        Worker(id="B", display_name="Bruno"),
        Worker(id="C", display_name="Chen"),
    ])


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def store(ids):
    """Empty store with deterministic ids."""
    return AssignmentStore(id_generator=ids)


@pytest.fixture
def engine(store, roster):
    return AllocationEngine(store, roster)


@pytest.fixture
def week():
    """Week of Sunday 2024-04-28 through Saturday 2024-05-04."""
    return Period.week(date(2024, 4, 28))


@pytest.fixture
def workspace(roster, ids):
    """Workspace on a memory store, clock pinned to Wednesday 2024-05-01."""
    ws = Workspace(
        MemoryStore(),
        config=EngineConfig(),
        clock=FixedClock(date(2024, 5, 1)),
        id_generator=ids,
    )
    for w in roster:
        ws.roster.add(w)
    return ws
