"""Error taxonomy for the allocation engine and its collaborators.

Writing an empty worker list to a slot is a deletion, not an error, so there
is no exception for it.
"""


class ShiftboardError(Exception):
    """Base class for all recoverable shiftboard errors."""


class InvalidMove(ShiftboardError, ValueError):
    """A move was declined; the store is unchanged."""

    def __init__(self, message: str, source_slot=None, source_index: int = -1):
        super().__init__(message)
        self.source_slot = source_slot
        self.source_index = source_index


class UnknownTemplate(ShiftboardError, KeyError):
    """No template has been captured under this name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown template: {self.name!r}"


class DuplicateWorker(ShiftboardError, ValueError):
    """A worker with this id is already on the roster."""


class UnknownWorker(ShiftboardError, KeyError):
    """No worker with this id is on the roster."""


class PersistenceError(ShiftboardError):
    """Stored data is malformed or written by a newer schema."""
