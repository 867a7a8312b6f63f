"""Orchestrator - walks tracks and sessions and drives the assignment engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from breakouts.config import GridConfig
from breakouts.domain.grid import GridRoom, GridSession, GridSlot
from breakouts.domain.repositories import RoomRepository, SessionRepository, SlotRepository
from breakouts.services.normalize import (
    GridDataError,
    PreserveDirective,
    apply_preserve,
    to_grid_rooms,
    to_grid_sessions,
    to_grid_slots,
)
from breakouts.services.validation import blocking_errors, validate_grid
from breakouts.shuffle import make_seed, shuffle_sessions

from .assigner import SlotRoomAssigner
from .context import AssignmentContext
from .home_room import select_home_room
from .levels import RELAXATION_LADDER, ConstraintLevel

MAIN_TRACK = ""


@dataclass
class GridResult:
    """Outcome of one grid run."""

    seed: str
    sessions: List[GridSession]
    rooms: List[GridRoom]
    slots: List[GridSlot]
    unscheduled: List[int] = field(default_factory=list)
    skipped: Dict[int, List[str]] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    relaxations: Dict[int, List[str]] = field(default_factory=dict)
    levels: Dict[int, ConstraintLevel] = field(default_factory=dict)
    home_rooms: Dict[str, str] = field(default_factory=dict)

    @property
    def placed(self) -> List[int]:
        return [s.number for s in self.sessions if s.placed]

    @property
    def modified(self) -> List[GridSession]:
        return [s for s in self.sessions if s.modified]

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        print(f"[WARN] {message}")


def _same_search(level: ConstraintLevel, previous: ConstraintLevel) -> bool:
    """True if two levels only differ by the home-room restriction."""
    return replace(level, step="", home_room=False) == replace(previous, step="", home_room=False)


def add_track(tracks: List[str], track: str) -> None:
    """Append a track label unless already known."""
    if track not in tracks:
        tracks.append(track)


class Orchestrator:
    """
    Schedules sessions track by track.

    Sessions are visited in shuffled order; a session that belongs to
    several tracks is handled by the first track that reaches it. The main
    track (sessions without any track) is visited last and has no home room.
    """

    def __init__(
        self,
        sessions: Sequence[GridSession],
        rooms: Sequence[GridRoom],
        slots: Sequence[GridSlot],
        ladder: Sequence[ConstraintLevel] = RELAXATION_LADDER,
    ):
        self.sessions = sorted(sessions, key=lambda s: s.number)
        self.rooms = list(rooms)
        self.slots = list(slots)
        self.ladder = list(ladder)

    @staticmethod
    def build_tracks(ordered: Sequence[GridSession]) -> List[str]:
        tracks: List[str] = []
        for session in ordered:
            for track in session.tracks:
                add_track(tracks, track)
        add_track(tracks, MAIN_TRACK)
        return tracks

    @staticmethod
    def next_session(
        ordered: Sequence[GridSession],
        track: str,
        processed: Set[int],
    ) -> Optional[GridSession]:
        """Return the next unprocessed session of a track and flag it as processed."""
        for session in ordered:
            if session.number in processed:
                continue
            if (track == MAIN_TRACK and not session.tracks) or track in session.tracks:
                processed.add(session.number)
                return session
        return None

    def run(self, seed: str) -> GridResult:
        """
        Build the grid.

        Args:
            seed: Seed for the session shuffle

        Returns:
            GridResult with sessions sorted by number
        """
        ordered = shuffle_sessions(self.sessions, seed)
        print(f"[INFO] Shuffled sessions with seed \"{seed}\" to: {', '.join(str(s.number) for s in ordered)}")

        context = AssignmentContext(ordered, self.rooms, self.slots)
        assigner = SlotRoomAssigner(context)
        result = GridResult(seed=seed, sessions=self.sessions, rooms=self.rooms, slots=self.slots)

        processed: Set[int] = set()
        for track in self.build_tracks(ordered):
            home_room = select_home_room(track, context)
            if home_room is not None:
                result.home_rooms[track] = home_room.name
                print(f"[INFO] Track \"{track}\": home room {home_room.name}")

            session = self.next_session(ordered, track, processed)
            while session is not None:
                self._schedule_session(session, assigner, home_room, result)
                session = self.next_session(ordered, track, processed)

        print(f"[OK] Placed {len(result.placed)} of {len(self.sessions)} sessions")
        return result

    def _schedule_session(
        self,
        session: GridSession,
        assigner: SlotRoomAssigner,
        home_room: Optional[GridRoom],
        result: GridResult,
    ) -> None:
        if session.placed:
            print(f"- keep #{session.number} in {session.room} during {session.slot}")
            return

        previous: Optional[ConstraintLevel] = None
        for level in self.ladder:
            if previous is not None:
                if home_room is None and _same_search(level, previous):
                    print(f"- #{session.number}: no home room, skip \"{level.step}\"")
                    continue
                result.relaxations.setdefault(session.number, []).append(level.step)
                result.warn(f"#{session.number}: relax constraints, {level.step} ({level.describe()})")
            previous = level
            placement = assigner.assign(session, level, home_room)
            if placement is not None:
                room, slot = placement
                result.levels[session.number] = level
                print(f"- assign #{session.number} to slot {slot.name} in room {room.name}")
                return

        result.unscheduled.append(session.number)
        result.warn(f"#{session.number}: could not be scheduled, all constraint levels exhausted")


def apply_grid(db_session: Session, sessions: Sequence[GridSession]) -> List[int]:
    """
    Write modified sessions back to the project.

    Each write is independent: a failure is reported and the remaining
    writes go on.

    Returns:
        Numbers of the sessions whose write failed
    """
    failed: List[int] = []
    for session in sessions:
        if not session.modified:
            continue
        print(f"- updating #{session.number}...")
        try:
            SessionRepository.assign_slot_and_room(db_session, session.number, session.room, session.slot)
        except (SQLAlchemyError, LookupError) as e:
            db_session.rollback()
            print(f"[ERROR] Could not update #{session.number}: {e}")
            failed.append(session.number)
            continue
        print(f"- updating #{session.number}... done")
    return failed


def build_grid(
    db_session: Session,
    cfg: GridConfig,
    directive: PreserveDirective | None = None,
    seed: str | None = None,
    apply: bool = False,
) -> GridResult:
    """
    Load project data, suggest a grid and optionally write it back.

    Args:
        db_session: Database session
        cfg: GridConfig
        directive: Which existing assignments to keep (default: none)
        seed: Shuffle seed (generated and reported when missing)
        apply: If True, persist modified sessions

    Raises:
        GridDataError: If project data is missing or malformed
    """
    directive = directive or PreserveDirective()
    try:
        room_records = RoomRepository.get_all(db_session)
        slot_records = SlotRepository.get_all(db_session)
        session_records = SessionRepository.get_all(db_session)
    except SQLAlchemyError as e:
        raise GridDataError(f"Project data could not be retrieved: {e}") from e
    if not room_records or not slot_records:
        raise GridDataError("Project data has no rooms or no slots")

    rooms = to_grid_rooms(room_records, cfg)
    slots = to_grid_slots(slot_records)
    sessions = to_grid_sessions(session_records, cfg)
    print(f"[INFO] Found {len(sessions)} sessions, {len(rooms)} rooms, {len(slots)} slots")

    errors = validate_grid(sessions, rooms, slots, cfg)
    skipped: Dict[int, List[str]] = {}
    valid: List[GridSession] = []
    for session in sessions:
        blocking = blocking_errors(errors, session.number)
        if blocking:
            skipped[session.number] = [f"{e.severity}: {e.type}" for e in blocking]
            print(f"[WARN] Skipping #{session.number}: {', '.join(skipped[session.number])}")
        else:
            valid.append(session)
    print(f"[INFO] Found {len(valid)} valid sessions: {', '.join(str(s.number) for s in valid)}")

    apply_preserve(valid, directive, rooms, slots)
    seed = seed or make_seed(cfg.seed_alphabet, cfg.seed_length)
    result = Orchestrator(valid, rooms, slots).run(seed)
    result.skipped = skipped

    if apply:
        failed = apply_grid(db_session, result.sessions)
        if failed:
            print(f"[ERROR] {len(failed)} session(s) could not be updated: {', '.join(map(str, failed))}")
        else:
            print(f"[OK] Applied {len(result.modified)} session update(s)")
    return result
