"""Grid engine: home rooms, slot/room assignment, relaxation, orchestration."""

from .assigner import SlotRoomAssigner
from .context import AssignmentContext
from .home_room import select_home_room
from .levels import RELAXATION_LADDER, ConstraintLevel
from .orchestrator import GridResult, Orchestrator, apply_grid, build_grid

__all__ = [
    "SlotRoomAssigner",
    "AssignmentContext",
    "select_home_room",
    "RELAXATION_LADDER",
    "ConstraintLevel",
    "GridResult",
    "Orchestrator",
    "apply_grid",
    "build_grid",
]
