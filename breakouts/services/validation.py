"""Session and grid validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from breakouts.config import GridConfig
from breakouts.constraints import has_chair_conflict, has_session_conflict, has_track_conflict
from breakouts.domain.grid import GridRoom, GridSession, GridSlot


# Problems the grid engine resolves by itself, so they do not exclude a session
ENGINE_RESOLVED_TYPES = ("chair conflict", "scheduling")

# Problems that may arise when a room or slot gets picked
SCHEDULING_PROBLEMS = (
    "error: chair conflict",
    "error: scheduling",
    "warning: capacity",
    "warning: conflict",
    "warning: duration",
    "warning: track",
)


@dataclass
class ValidationError:
    session: int
    severity: str  # error, warning, check
    type: str
    messages: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.severity}: {self.type}"


def _add(errors: Dict[tuple, ValidationError], number: int, severity: str, type_: str, message: str) -> None:
    key = (number, severity, type_)
    if key not in errors:
        errors[key] = ValidationError(session=number, severity=severity, type=type_)
    errors[key].messages.append(message)


def validate_grid(
    sessions: Sequence[GridSession],
    rooms: Sequence[GridRoom],
    slots: Sequence[GridSlot],
    cfg: GridConfig,
) -> List[ValidationError]:
    """
    Validate every session against the current grid.

    Returns:
        Problems grouped per (session, severity, type), in session order
    """
    rooms_by_name = {r.name: r for r in rooms}
    slots_by_name = {s.name: s for s in slots}
    numbers = {s.number for s in sessions}
    errors: Dict[tuple, ValidationError] = {}

    for session in sorted(sessions, key=lambda s: s.number):
        n = session.number
        if not session.chairs:
            _add(errors, n, "error", "format", "No chairs listed")
        if session.duration not in cfg.allowed_durations:
            _add(errors, n, "error", "format", f"Unexpected duration {session.duration}")
        for other in session.conflicts:
            if other == n or other not in numbers:
                _add(errors, n, "warning", "conflict", f"Conflicting session #{other} is not a known session")

        room = rooms_by_name.get(session.room) if session.room else None
        slot = slots_by_name.get(session.slot) if session.slot else None
        if session.room and room is None:
            _add(errors, n, "error", "scheduling", f"Unknown room \"{session.room}\"")
        if session.slot and slot is None:
            _add(errors, n, "error", "scheduling", f"Unknown slot \"{session.slot}\"")

        if room is not None and room.capacity < session.capacity:
            _add(errors, n, "warning", "capacity", f"Room {room.name} is too small for {session.capacity} people")

        if slot is None:
            continue
        if slot.duration != session.duration:
            _add(errors, n, "warning", "duration", f"Slot {slot.name} lasts {slot.duration} minutes")

        for other in sessions:
            if other is session or other.slot != session.slot:
                continue
            if room is not None and other.room == session.room:
                _add(errors, n, "error", "scheduling", f"Same room and slot as #{other.number}")
            if has_chair_conflict(session, [other]):
                _add(errors, n, "error", "chair conflict", f"Same chair as #{other.number} during {slot.name}")
            if has_track_conflict(session, [other]):
                _add(errors, n, "warning", "track", f"Same track as #{other.number} during {slot.name}")
            if has_session_conflict(session, [other]):
                _add(errors, n, "warning", "conflict", f"Conflicts with #{other.number} during {slot.name}")

    return list(errors.values())


def validate_session(
    number: int,
    sessions: Sequence[GridSession],
    rooms: Sequence[GridRoom],
    slots: Sequence[GridSlot],
    cfg: GridConfig,
) -> List[ValidationError]:
    return [e for e in validate_grid(sessions, rooms, slots, cfg) if e.session == number]


def blocking_errors(errors: Sequence[ValidationError], number: int) -> List[ValidationError]:
    """Errors that keep a session away from the grid engine."""
    return [
        e for e in errors
        if e.session == number and e.severity == "error" and e.type not in ENGINE_RESOLVED_TYPES
    ]
