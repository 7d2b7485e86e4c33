# shiftboard/engine - Allocation, conflicts, templates
from .allocation import AllocationEngine, MoveResult, compute_load, suggest_assignments
from .conflicts import Conflict, detect_conflicts, find_conflicts
from .reconcile import find_orphans, reconcile_orphans
from .stats import period_matrix, workload_table
from .templates import TemplateManager

__all__ = [
    "AllocationEngine",
    "MoveResult",
    "compute_load",
    "suggest_assignments",
    "Conflict",
    "find_conflicts",
    "detect_conflicts",
    "TemplateManager",
    "find_orphans",
    "reconcile_orphans",
    "workload_table",
    "period_matrix",
]
