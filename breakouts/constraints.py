"""Conflict predicates for placing a session in a slot and room."""

from __future__ import annotations

from typing import Iterable, Optional

from .domain.grid import GridRoom, GridSession, GridSlot


STRICT = "strict"
LOOSE = "loose"


def has_track_conflict(session: GridSession, occupants: Iterable[GridSession]) -> bool:
    for other in occupants:
        if any(track in session.tracks for track in other.tracks):
            return True
    return False


def has_chair_conflict(session: GridSession, occupants: Iterable[GridSession]) -> bool:
    for other in occupants:
        for chair in session.chairs:
            if any(chair.same_person(c) for c in other.chairs):
                return True
    return False


def has_session_conflict(session: GridSession, occupants: Iterable[GridSession]) -> bool:
    """Declared conflicts count in both directions."""
    for other in occupants:
        if other.number in session.conflicts or session.number in other.conflicts:
            return True
    return False


def meets_duration(session: GridSession, slot: GridSlot, mode: Optional[str]) -> bool:
    """
    Check slot duration against the session's preference.

    `mode` is "strict" (exact match), "loose" (slot at least as long), or
    None when duration is not checked.
    """
    if mode is None:
        return True
    if mode == STRICT:
        return slot.duration == session.duration
    if mode == LOOSE:
        return slot.duration >= session.duration
    raise ValueError(f"Unknown duration mode {mode!r}")


def meets_capacity(session: GridSession, room: GridRoom) -> bool:
    return room.capacity >= session.capacity
