"""Slot and room assignment for one session at a given constraint level."""

from __future__ import annotations

from typing import List, Optional, Tuple

from breakouts.constraints import (
    has_chair_conflict,
    has_session_conflict,
    has_track_conflict,
    meets_capacity,
    meets_duration,
)
from breakouts.domain.grid import GridRoom, GridSession, GridSlot

from .context import AssignmentContext
from .levels import ConstraintLevel


class SlotRoomAssigner:
    """
    Searches (room, slot) pairs for a session under one constraint level.

    Assignments are only ever added: a committed room or slot is never
    taken back, and preserved values are kept as they are.
    """

    def __init__(self, context: AssignmentContext):
        self.context = context

    def candidate_rooms(
        self,
        session: GridSession,
        level: ConstraintLevel,
        home_room: Optional[GridRoom] = None,
    ) -> List[GridRoom]:
        """
        Rooms to try, in order.

        A preserved room is the only candidate. Otherwise the track's home
        room when that restriction is on, else rooms that meet capacity from
        smallest to largest, followed (once capacity is dropped) by the rooms
        that are too small, largest first.
        """
        if session.room is not None:
            return [self.context.room(session.room)]
        if level.home_room and home_room is not None:
            return [home_room]

        rooms = self.context.rooms
        fitting = sorted(
            (r for r in rooms if meets_capacity(session, r)),
            key=lambda r: (r.capacity, r.pos),
        )
        if level.capacity:
            return fitting
        too_small = sorted(
            (r for r in rooms if not meets_capacity(session, r)),
            key=lambda r: (-r.capacity, r.pos),
        )
        return fitting + too_small

    def candidate_slots(
        self,
        session: GridSession,
        room: GridRoom,
        natural_order: bool = False,
    ) -> List[GridSlot]:
        """
        Free slots of a room, in order.

        Least busy slots come first (ties broken by position) unless
        `natural_order` is set, which keeps a track's sessions back-to-back
        in its home room.
        """
        if session.slot is not None:
            slot = self.context.slot(session.slot)
            if self.context.is_taken(room, slot, exclude=session):
                return []
            return [slot]

        free = self.context.free_slots(room)
        if natural_order:
            return sorted(free, key=lambda s: s.pos)
        return sorted(
            free,
            key=lambda s: (len(self.context.slot_sessions(s, exclude=session)), s.pos),
        )

    def is_usable(
        self,
        session: GridSession,
        room: GridRoom,
        slot: GridSlot,
        level: ConstraintLevel,
    ) -> bool:
        """True if none of the predicates enforced at `level` fires."""
        if session.slot is None and not meets_duration(session, slot, level.duration):
            return False
        if session.room is None and level.capacity and not meets_capacity(session, room):
            return False

        occupants = self.context.slot_sessions(slot, exclude=session)
        if has_chair_conflict(session, occupants):
            return False
        if level.track_conflicts and has_track_conflict(session, occupants):
            return False
        if level.session_conflicts and has_session_conflict(session, occupants):
            return False
        return True

    def find_placement(
        self,
        session: GridSession,
        level: ConstraintLevel,
        home_room: Optional[GridRoom] = None,
    ) -> Optional[Tuple[GridRoom, GridSlot]]:
        natural_order = level.home_room and home_room is not None and session.room is None
        for room in self.candidate_rooms(session, level, home_room):
            for slot in self.candidate_slots(session, room, natural_order):
                if self.is_usable(session, room, slot, level):
                    return room, slot
        return None

    def assign(
        self,
        session: GridSession,
        level: ConstraintLevel,
        home_room: Optional[GridRoom] = None,
    ) -> Optional[Tuple[GridRoom, GridSlot]]:
        """
        Place the session at the first usable (room, slot) pair.

        Returns:
            The chosen pair, or None when nothing works at this level
        """
        placement = self.find_placement(session, level, home_room)
        if placement is not None:
            room, slot = placement
            self.context.commit(session, room, slot)
        return placement
