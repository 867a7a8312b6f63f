"""Shared assignment state for one grid run."""

from __future__ import annotations

from typing import Dict, List, Optional

from breakouts.domain.grid import GridRoom, GridSession, GridSlot


class AssignmentContext:
    """
    Per-room and per-slot occupancy, owned by the orchestrator.

    Built once from the sessions' current (preserved) assignments, then
    updated incrementally through `commit`. Rooms and slots are kept as
    ordered lists; the dicts are only used for lookups.
    """

    def __init__(
        self,
        sessions: List[GridSession],
        rooms: List[GridRoom],
        slots: List[GridSlot],
    ):
        self.sessions = sessions
        self.rooms = rooms
        self.slots = slots
        self._rooms_by_name: Dict[str, GridRoom] = {r.name: r for r in rooms}
        self._slots_by_name: Dict[str, GridSlot] = {s.name: s for s in slots}
        self._room_sessions: Dict[str, List[GridSession]] = {r.name: [] for r in rooms}
        self._slot_sessions: Dict[str, List[GridSession]] = {s.name: [] for s in slots}

        for session in sessions:
            if session.room is not None:
                self._room_sessions[session.room].append(session)
            if session.slot is not None:
                self._slot_sessions[session.slot].append(session)

    def room(self, name: str) -> GridRoom:
        return self._rooms_by_name[name]

    def slot(self, name: str) -> GridSlot:
        return self._slots_by_name[name]

    def room_sessions(self, room: GridRoom) -> List[GridSession]:
        return self._room_sessions[room.name]

    def slot_sessions(self, slot: GridSlot, exclude: Optional[GridSession] = None) -> List[GridSession]:
        return [s for s in self._slot_sessions[slot.name] if s is not exclude]

    def is_taken(self, room: GridRoom, slot: GridSlot, exclude: Optional[GridSession] = None) -> bool:
        """True if another session already sits in that room during that slot."""
        return any(
            s.room == room.name and s is not exclude
            for s in self._slot_sessions[slot.name]
        )

    def free_slots(self, room: GridRoom) -> List[GridSlot]:
        return [slot for slot in self.slots if not self.is_taken(room, slot)]

    def commit(self, session: GridSession, room: GridRoom, slot: GridSlot) -> None:
        """Fill in whichever of room and slot the session does not have yet."""
        if session.room is None:
            session.room = room.name
            self._room_sessions[room.name].append(session)
        if session.slot is None:
            session.slot = slot.name
            self._slot_sessions[slot.name].append(session)
