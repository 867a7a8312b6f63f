"""Conversion of project records into engine types, and preserve directives."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from breakouts.config import GridConfig
from breakouts.domain.grid import Chair, GridRoom, GridSession, GridSlot
from breakouts.domain.models import BreakoutSession, Room, Slot


ROOM_NAME_RE = re.compile(r"^(.*) \((\d+)\)$")
SLOT_NAME_RE = re.compile(r"^(\d+):(\d+)\s*-\s*(\d+):(\d+)$")
ID_LIST_RE = re.compile(r"^\d+(,\d+)*$")


class GridDataError(RuntimeError):
    """Project data is missing or cannot be used."""


@dataclass
class PreserveDirective:
    """
    Which existing room/slot assignments survive before scheduling.

    mode is "none", "all" (every session with a room or slot) or "list"
    (the given ids). `except_ids` are removed from the preserved set.
    """

    mode: str = "none"
    ids: List[int] = field(default_factory=list)
    except_ids: List[int] = field(default_factory=list)

    def preserved(self, sessions: Sequence[GridSession]) -> set[int]:
        if self.mode == "all":
            keep = {s.number for s in sessions if s.room is not None or s.slot is not None}
        elif self.mode == "list":
            keep = set(self.ids)
        else:
            keep = set()
        return keep - set(self.except_ids)


def parse_preserve(value: str) -> PreserveDirective:
    """Parse "all", "none" or a comma-separated list of session numbers."""
    value = value.strip()
    if value in ("all", "none"):
        return PreserveDirective(mode=value)
    if not ID_LIST_RE.match(value):
        raise ValueError(f"Expected \"all\", \"none\" or a list of session numbers, got \"{value}\"")
    return PreserveDirective(mode="list", ids=[int(n) for n in value.split(",")])


def parse_except(value: str) -> List[int]:
    """Parse "none" or a comma-separated list of session numbers."""
    value = value.strip()
    if value == "none":
        return []
    if not ID_LIST_RE.match(value):
        raise ValueError(f"Expected \"none\" or a list of session numbers, got \"{value}\"")
    return [int(n) for n in value.split(",")]


def parse_room_name(name: str, default_capacity: int = 30) -> Tuple[str, int]:
    """'Salon Ecija (30)' -> ('Salon Ecija', 30)."""
    match = ROOM_NAME_RE.match(name)
    if match:
        return match.group(1), int(match.group(2))
    return name, default_capacity


def parse_slot_name(name: str) -> Optional[Tuple[str, str, int]]:
    """'9:30 - 10:30' -> ('9:30', '10:30', 60), None if not a time range."""
    match = SLOT_NAME_RE.match(name.strip())
    if not match:
        return None
    h1, m1, h2, m2 = (int(g) for g in match.groups())
    return (
        f"{match.group(1)}:{match.group(2)}",
        f"{match.group(3)}:{match.group(4)}",
        (h2 * 60 + m2) - (h1 * 60 + m1),
    )


def parse_chairs(value: str | None) -> List[Chair]:
    """
    Parse a chairs field.

    Entries are separated by commas or new lines, may start with a markdown
    list dash. "@login" entries may be space separated; anything else is a
    display name.
    """
    chairs: List[Chair] = []
    if not value:
        return chairs
    for entry in re.split(r"[\n,]", value):
        entry = re.sub(r"^-\s*", "", entry.strip())
        if not entry:
            continue
        if entry.startswith("@"):
            for nick in entry.split():
                chairs.append(Chair(login=nick.lstrip("@")))
        else:
            chairs.append(Chair(name=entry))
    return chairs


def parse_conflicts(value: str | None) -> List[int]:
    """'#12, #15' -> [12, 15]."""
    if not value:
        return []
    numbers = []
    for token in re.split(r"[\s,]+", value.strip()):
        token = token.lstrip("#")
        if token:
            numbers.append(int(token))
    return numbers


def derive_tracks(labels: Sequence[str], prefix: str = "track: ") -> List[str]:
    tracks: List[str] = []
    for label in labels:
        if label.startswith(prefix):
            track = label[len(prefix):].strip()
            if track and track not in tracks:
                tracks.append(track)
    return tracks


def to_grid_sessions(records: Sequence[BreakoutSession], cfg: GridConfig) -> List[GridSession]:
    """
    Build engine sessions from project records.

    Unknown capacity (0) becomes `cfg.default_capacity`, a missing duration
    becomes `cfg.default_duration`. Room and slot are copied as they are;
    `apply_preserve` decides what survives.

    Raises:
        GridDataError: If a record has no number or no title
    """
    sessions = []
    for record in records:
        if record.number is None or not record.title:
            raise GridDataError(f"Session record {record!r} misses a number or a title")
        try:
            conflicts = parse_conflicts(record.conflicts)
        except ValueError as e:
            raise GridDataError(f"Invalid conflicts for session #{record.number}: {record.conflicts!r}") from e
        sessions.append(
            GridSession(
                number=int(record.number),
                title=record.title,
                duration=int(record.duration or cfg.default_duration),
                capacity=int(record.capacity or cfg.default_capacity),
                tracks=derive_tracks(record.label_list(), cfg.track_prefix),
                chairs=parse_chairs(record.chairs),
                conflicts=conflicts,
                room=record.room or None,
                slot=record.slot or None,
                initial_room=record.room or None,
                initial_slot=record.slot or None,
            )
        )
    return sessions


def to_grid_rooms(records: Sequence[Room], cfg: GridConfig) -> List[GridRoom]:
    rooms = []
    for pos, record in enumerate(records):
        label, parsed_capacity = parse_room_name(record.name, cfg.default_room_capacity)
        capacity = record.capacity if record.capacity is not None else parsed_capacity
        rooms.append(GridRoom(name=record.name, capacity=int(capacity), pos=pos, label=record.label or label))
    return rooms


def to_grid_slots(records: Sequence[Slot]) -> List[GridSlot]:
    """
    Raises:
        GridDataError: If a slot has no duration and its name is not a time range
    """
    slots = []
    for pos, record in enumerate(records):
        start, end, duration = record.start, record.end, record.duration
        if duration is None:
            parsed = parse_slot_name(record.name)
            if parsed is None:
                raise GridDataError(f"Slot \"{record.name}\" has no duration")
            start, end, duration = parsed
        slots.append(GridSlot(name=record.name, duration=int(duration), pos=pos, start=start, end=end))
    return slots


def apply_preserve(
    sessions: Sequence[GridSession],
    directive: PreserveDirective,
    rooms: Sequence[GridRoom],
    slots: Sequence[GridSlot],
) -> set[int]:
    """
    Clear room and slot on every session that is not preserved.

    Preserved values that do not name a known room or slot are cleared too.

    Returns:
        Numbers of the preserved sessions
    """
    keep = directive.preserved(sessions)
    room_names = {r.name for r in rooms}
    slot_names = {s.name for s in slots}
    for session in sessions:
        if session.number not in keep:
            session.room = None
            session.slot = None
            continue
        if session.room is not None and session.room not in room_names:
            print(f"[WARN] #{session.number}: unknown room \"{session.room}\" dropped")
            session.room = None
        if session.slot is not None and session.slot not in slot_names:
            print(f"[WARN] #{session.number}: unknown slot \"{session.slot}\" dropped")
            session.slot = None
    return keep
