"""Constraint levels and the fixed relaxation ladder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from breakouts.constraints import LOOSE, STRICT


@dataclass(frozen=True)
class ConstraintLevel:
    """
    The subset of constraints enforced during one search attempt.

    `step` names the relaxation that produced this level from the previous
    one (empty for the initial level). Chair conflicts are not listed:
    they are always enforced.
    """

    step: str
    duration: Optional[str] = STRICT
    home_room: bool = True
    capacity: bool = True
    session_conflicts: bool = True
    track_conflicts: bool = True

    def describe(self) -> str:
        conflicts = [
            name
            for name, on in (("session", self.session_conflicts), ("track", self.track_conflicts))
            if on
        ]
        return (
            f"duration={self.duration or 'off'}, "
            f"home_room={'on' if self.home_room else 'off'}, "
            f"capacity={'on' if self.capacity else 'off'}, "
            f"conflicts={{{','.join(conflicts)}}}"
        )


INITIAL = ConstraintLevel(step="")
LOOSE_DURATION = ConstraintLevel(step="loose duration", duration=LOOSE)
NO_HOME_ROOM = ConstraintLevel(step="drop home room", duration=LOOSE, home_room=False)
NO_DURATION = ConstraintLevel(step="drop duration", duration=None, home_room=False)
NO_CAPACITY = ConstraintLevel(step="drop capacity", duration=None, home_room=False, capacity=False)
TRACK_CONFLICTS_ONLY = ConstraintLevel(
    step="drop session conflicts",
    duration=None,
    home_room=False,
    capacity=False,
    session_conflicts=False,
)
SESSION_CONFLICTS_ONLY = ConstraintLevel(
    step="drop track conflicts",
    duration=None,
    home_room=False,
    capacity=False,
    track_conflicts=False,
)
NO_CONFLICTS = ConstraintLevel(
    step="drop all conflicts",
    duration=None,
    home_room=False,
    capacity=False,
    session_conflicts=False,
    track_conflicts=False,
)

RELAXATION_LADDER: Tuple[ConstraintLevel, ...] = (
    INITIAL,
    LOOSE_DURATION,
    NO_HOME_ROOM,
    NO_DURATION,
    NO_CAPACITY,
    TRACK_CONFLICTS_ONLY,
    SESSION_CONFLICTS_ONLY,
    NO_CONFLICTS,
)
