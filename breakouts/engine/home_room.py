"""Track home-room selection."""

from __future__ import annotations

from typing import List, Optional

from breakouts.domain.grid import GridRoom

from .context import AssignmentContext


def rank_rooms_for_track(track: str, context: AssignmentContext) -> List[GridRoom]:
    """
    Rank rooms for a track, least loaded first.

    Load ignores the track's own sessions. Rooms already requested by one of
    the track's sessions (preserved room) come before the others.
    """
    requested = {s.room for s in context.sessions if track in s.tracks and s.room is not None}

    def load(room: GridRoom) -> int:
        return sum(1 for s in context.room_sessions(room) if track not in s.tracks)

    def ranked(rooms: List[GridRoom]) -> List[GridRoom]:
        return sorted(rooms, key=lambda r: (load(r), r.pos))

    return (
        ranked([r for r in context.rooms if r.name in requested])
        + ranked([r for r in context.rooms if r.name not in requested])
    )


def select_home_room(track: str, context: AssignmentContext) -> Optional[GridRoom]:
    """
    Pick the room that should preferably host all sessions of a track.

    Preference order over the ranked rooms:
    1. meets the largest capacity need and has enough free slots left
    2. meets the largest capacity need
    3. has enough free slots left
    4. first ranked room

    The main track ("") has no home room.
    """
    if not track:
        return None
    track_sessions = [s for s in context.sessions if track in s.tracks]
    if not track_sessions or not context.rooms:
        return None

    max_capacity = max(s.capacity for s in track_sessions)
    remaining = sum(1 for s in track_sessions if s.room is None)
    ranked = rank_rooms_for_track(track, context)

    def big_enough(room: GridRoom) -> bool:
        return room.capacity >= max_capacity

    def can_fit(room: GridRoom) -> bool:
        return len(context.free_slots(room)) >= remaining

    for accept in (
        lambda r: big_enough(r) and can_fit(r),
        big_enough,
        can_fit,
    ):
        for room in ranked:
            if accept(room):
                return room
    return ranked[0]
