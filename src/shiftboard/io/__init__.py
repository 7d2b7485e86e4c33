# shiftboard/io - Persistence collaborators
from .persistence import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    load_assignments,
    load_roster,
    load_templates,
    save_assignments,
    save_roster,
    save_templates,
)

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "save_roster",
    "load_roster",
    "save_assignments",
    "load_assignments",
    "save_templates",
    "load_templates",
]
