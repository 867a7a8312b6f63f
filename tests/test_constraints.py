import pytest

from breakouts.constraints import (
    has_chair_conflict,
    has_session_conflict,
    has_track_conflict,
    meets_capacity,
    meets_duration,
)
from breakouts.domain.grid import Chair, GridRoom, GridSession, GridSlot


def _session(number, tracks=(), chairs=(), conflicts=(), duration=60, capacity=30):
    return GridSession(
        number=number,
        title=f"Session {number}",
        duration=duration,
        capacity=capacity,
        tracks=list(tracks),
        chairs=list(chairs),
        conflicts=list(conflicts),
    )


def test_track_conflict_needs_a_shared_track():
    s = _session(1, tracks=["media"])
    assert has_track_conflict(s, [_session(2, tracks=["a11y", "media"])])
    assert not has_track_conflict(s, [_session(2, tracks=["a11y"])])
    assert not has_track_conflict(_session(3), [_session(4)])


def test_chair_conflict_compares_logins_then_names():
    s = _session(1, chairs=[Chair(login="alice")])
    assert has_chair_conflict(s, [_session(2, chairs=[Chair(login="alice", name="Alice")])])
    assert not has_chair_conflict(s, [_session(2, chairs=[Chair(login="bob")])])

    # Both have logins: names are not looked at
    s = _session(1, chairs=[Chair(login="a", name="Ann")])
    assert not has_chair_conflict(s, [_session(2, chairs=[Chair(login="b", name="Ann")])])

    s = _session(1, chairs=[Chair(name="Ann")])
    assert has_chair_conflict(s, [_session(2, chairs=[Chair(login="ann", name="Ann")])])
    assert not has_chair_conflict(_session(1, chairs=[Chair()]), [_session(2, chairs=[Chair()])])


def test_session_conflict_is_symmetric():
    declared = _session(1, conflicts=[2])
    other = _session(2)
    assert has_session_conflict(declared, [other])
    assert has_session_conflict(other, [declared])
    assert not has_session_conflict(other, [_session(3)])


def test_duration_modes():
    s = _session(1, duration=30)
    short = GridSlot(name="short", duration=30, pos=0)
    long = GridSlot(name="long", duration=60, pos=1)
    assert meets_duration(s, short, "strict")
    assert not meets_duration(s, long, "strict")
    assert meets_duration(s, long, "loose")
    assert not meets_duration(_session(2, duration=60), short, "loose")
    assert meets_duration(_session(2, duration=60), short, None)
    with pytest.raises(ValueError):
        meets_duration(s, short, "sloppy")


def test_capacity():
    room = GridRoom(name="Room", capacity=30, pos=0)
    assert meets_capacity(_session(1, capacity=30), room)
    assert not meets_capacity(_session(1, capacity=50), room)
