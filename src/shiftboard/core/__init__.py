# shiftboard/core - Periods, collaborators and errors shared by the engine
from .clock import FixedClock, SequentialIdGenerator, SystemClock, TimestampIdGenerator
from .errors import (
    DuplicateWorker,
    InvalidMove,
    PersistenceError,
    ShiftboardError,
    UnknownTemplate,
    UnknownWorker,
)
from .periods import Period, SlotIndex, week_start_for

__all__ = [
    "Period", "SlotIndex", "week_start_for",
    "SystemClock", "FixedClock", "TimestampIdGenerator", "SequentialIdGenerator",
    "ShiftboardError", "InvalidMove", "UnknownTemplate",
    "DuplicateWorker", "UnknownWorker", "PersistenceError",
]
