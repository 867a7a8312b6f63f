"""Tests for session and grid validation."""

from breakouts.config import GridConfig
from breakouts.domain.grid import Chair, GridRoom, GridSession, GridSlot
from breakouts.services.validation import (
    SCHEDULING_PROBLEMS,
    blocking_errors,
    validate_grid,
    validate_session,
)


ROOMS = [GridRoom("A", 30, 0), GridRoom("B", 60, 1)]
SLOTS = [GridSlot("S1", 60, 0), GridSlot("S2", 30, 1)]


def _session(number, **kwargs):
    kwargs.setdefault("chairs", [Chair(login=f"chair{number}")])
    kwargs.setdefault("duration", 60)
    kwargs.setdefault("capacity", 20)
    return GridSession(number=number, title=f"Session {number}", **kwargs)


def _labels(errors, number):
    return sorted(e.label for e in errors if e.session == number)


def test_clean_grid_has_no_errors():
    sessions = [_session(1, room="A", slot="S1"), _session(2, room="B", slot="S1")]
    assert validate_grid(sessions, ROOMS, SLOTS, GridConfig()) == []


def test_format_errors():
    sessions = [_session(1, chairs=[]), _session(2, duration=45)]
    errors = validate_grid(sessions, ROOMS, SLOTS, GridConfig())
    assert _labels(errors, 1) == ["error: format"]
    assert _labels(errors, 2) == ["error: format"]
    assert "Unexpected duration 45" in errors[1].messages


def test_unknown_conflicting_session():
    errors = validate_grid([_session(1, conflicts=[99])], ROOMS, SLOTS, GridConfig())
    assert _labels(errors, 1) == ["warning: conflict"]


def test_scheduling_errors():
    chair = [Chair(login="alice")]
    sessions = [
        _session(1, room="Nowhere"),
        _session(2, room="A", slot="S1", chairs=chair),
        _session(3, room="A", slot="S1", chairs=chair),
    ]
    errors = validate_grid(sessions, ROOMS, SLOTS, GridConfig())
    assert _labels(errors, 1) == ["error: scheduling"]
    assert _labels(errors, 2) == ["error: chair conflict", "error: scheduling"]
    assert _labels(errors, 3) == ["error: chair conflict", "error: scheduling"]


def test_grid_warnings():
    sessions = [
        _session(1, room="A", slot="S1", capacity=50, tracks=["t"]),
        _session(2, room="B", slot="S1", tracks=["t"], conflicts=[1]),
        _session(3, room="A", slot="S2"),
    ]
    errors = validate_grid(sessions, ROOMS, SLOTS, GridConfig())
    assert _labels(errors, 1) == ["warning: capacity", "warning: conflict", "warning: track"]
    assert _labels(errors, 2) == ["warning: conflict", "warning: track"]
    assert _labels(errors, 3) == ["warning: duration"]
    assert all(e.label in SCHEDULING_PROBLEMS for e in errors)


def test_messages_are_grouped():
    sessions = [
        _session(1, room="A", slot="S1", conflicts=[2, 3]),
        _session(2, room="B", slot="S1"),
        _session(3, room="C", slot="S1"),
    ]
    rooms = ROOMS + [GridRoom("C", 30, 2)]
    errors = validate_session(1, sessions, rooms, SLOTS, GridConfig())
    assert len(errors) == 1
    assert errors[0].messages == ["Conflicts with #2 during S1", "Conflicts with #3 during S1"]


def test_blocking_errors():
    chair = [Chair(login="alice")]
    sessions = [
        _session(1, chairs=[]),
        _session(2, room="A", slot="S1", chairs=chair),
        _session(3, room="A", slot="S1", chairs=chair),
    ]
    errors = validate_grid(sessions, ROOMS, SLOTS, GridConfig())
    assert [e.label for e in blocking_errors(errors, 1)] == ["error: format"]
    # The engine takes care of scheduling problems
    assert blocking_errors(errors, 2) == []
