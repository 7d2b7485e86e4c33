# shiftboard/models - Data models for the allocation engine
from .assignment import Assignment, Slot, parse_date
from .config import EngineConfig
from .shift import SHIFT_ORDER, ShiftType
from .template import TemplateEntry, WeekTemplate
from .worker import Roster, Worker

__all__ = [
    "Worker", "Roster",
    "ShiftType", "SHIFT_ORDER",
    "Slot", "Assignment", "parse_date",
    "WeekTemplate", "TemplateEntry",
    "EngineConfig",
]
