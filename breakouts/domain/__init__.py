"""Domain models, engine value types and data access layer."""

from .grid import Chair, GridRoom, GridSession, GridSlot
from .models import Base, BreakoutSession, Room, Slot
from .repositories import RoomRepository, SessionRepository, SlotRepository

__all__ = [
    "Chair",
    "GridRoom",
    "GridSession",
    "GridSlot",
    "Base",
    "BreakoutSession",
    "Room",
    "Slot",
    "SessionRepository",
    "RoomRepository",
    "SlotRepository",
]
