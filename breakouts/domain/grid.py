"""Value types the grid engine works on."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Chair:
    """A session chair, known by login, display name, or both."""

    login: Optional[str] = None
    name: Optional[str] = None

    def same_person(self, other: "Chair") -> bool:
        if self.login and other.login:
            return self.login == other.login
        if self.name and other.name:
            return self.name == other.name
        return False

    def __str__(self) -> str:
        return f"@{self.login}" if self.login else (self.name or "?")


@dataclass
class GridRoom:
    name: str
    capacity: int
    pos: int
    label: Optional[str] = None


@dataclass
class GridSlot:
    name: str
    duration: int
    pos: int
    start: Optional[str] = None
    end: Optional[str] = None


@dataclass
class GridSession:
    """
    A breakout session as seen by the engine.

    Capacity and duration are already normalized (never 0 / None).
    `room` and `slot` hold room and slot names; both set means placed.
    `initial_room` / `initial_slot` keep what the provider had before the
    run, to compute what needs to be written back.
    """

    number: int
    title: str
    duration: int
    capacity: int
    tracks: List[str] = field(default_factory=list)
    chairs: List[Chair] = field(default_factory=list)
    conflicts: List[int] = field(default_factory=list)
    room: Optional[str] = None
    slot: Optional[str] = None
    initial_room: Optional[str] = None
    initial_slot: Optional[str] = None

    @property
    def placed(self) -> bool:
        return self.room is not None and self.slot is not None

    @property
    def modified(self) -> bool:
        return self.room != self.initial_room or self.slot != self.initial_slot

    def __repr__(self) -> str:
        return f"<GridSession(#{self.number}, room={self.room!r}, slot={self.slot!r})>"
