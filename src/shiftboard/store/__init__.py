"""Assignment storage."""
from .assignments import AssignmentStore, PeriodListing, dedupe

__all__ = ["AssignmentStore", "PeriodListing", "dedupe"]
