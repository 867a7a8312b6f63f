"""Read-only views of a grid: console listings, tables, HTML."""

from __future__ import annotations

import html
from typing import Callable, Dict, List, Tuple

import pandas as pd

from breakouts.constraints import has_track_conflict
from breakouts.domain.grid import GridSession
from breakouts.engine.orchestrator import GridResult


def _room_pos(result: GridResult) -> dict:
    return {r.name: r.pos for r in result.rooms}


def _slot_pos(result: GridResult) -> dict:
    return {s.name: s.pos for s in result.slots}


def format_by_slot(result: GridResult) -> str:
    room_pos = _room_pos(result)
    lines = ["Grid - by slot", "--------------"]
    for slot in result.slots:
        lines.append(slot.name)
        occupants = sorted(
            (s for s in result.sessions if s.slot == slot.name),
            key=lambda s: (room_pos.get(s.room, len(room_pos)), s.number),
        )
        for s in occupants:
            lines.append(f"- {s.room}: #{s.number} {s.title}")
    return "\n".join(lines)


def format_by_room(result: GridResult) -> str:
    slot_pos = _slot_pos(result)
    lines = ["Grid - by room", "--------------"]
    for room in result.rooms:
        lines.append(room.name)
        occupants = sorted(
            (s for s in result.sessions if s.room == room.name),
            key=lambda s: (slot_pos.get(s.slot, len(slot_pos)), s.number),
        )
        for s in occupants:
            lines.append(f"- {s.slot}: #{s.number} {s.title}")
    return "\n".join(lines)


def format_by_session(result: GridResult) -> str:
    lines = ["Grid - by session", "-----------------"]
    for s in result.sessions:
        if s.placed:
            lines.append(f"#{s.number} - {s.slot} - {s.room}")
        else:
            lines.append(f"#{s.number} - [WARNING] could not be scheduled")
    for number in sorted(result.skipped):
        lines.append(f"#{number} - [WARNING] skipped ({', '.join(result.skipped[number])})")
    return "\n".join(lines)


def format_report(result: GridResult) -> str:
    return "\n\n".join([
        format_by_slot(result),
        format_by_room(result),
        format_by_session(result),
        f"Seed: {result.seed}",
    ])


def sessions_frame(result: GridResult) -> pd.DataFrame:
    """One row per session with its position in the grid."""
    rows = []
    for s in result.sessions:
        rows.append({
            "number": s.number,
            "title": s.title,
            "room": s.room,
            "slot": s.slot,
            "tracks": ";".join(s.tracks),
            "status": "placed" if s.placed else "unscheduled",
            "modified": s.modified,
        })
    for number, reasons in sorted(result.skipped.items()):
        rows.append({
            "number": number,
            "title": None,
            "room": None,
            "slot": None,
            "tracks": "",
            "status": "skipped: " + ", ".join(reasons),
            "modified": False,
        })
    return pd.DataFrame(rows, columns=["number", "title", "room", "slot", "tracks", "status", "modified"])


def grid_table(
    result: GridResult,
    render: Callable[[GridSession], str] | None = None,
    separator: str = " / ",
) -> pd.DataFrame:
    """
    Slots as rows, rooms as columns, "#number title" in cells.

    Sessions sharing a room and slot are all listed in the cell, joined
    with `separator`, in session number order.
    """
    render = render or (lambda s: f"#{s.number} {s.title}")
    cells: Dict[Tuple[str, str], List[str]] = {}
    for s in sorted(result.sessions, key=lambda s: s.number):
        if s.placed:
            cells.setdefault((s.slot, s.room), []).append(render(s))

    table = pd.DataFrame(
        "",
        index=[s.name for s in result.slots],
        columns=[r.name for r in result.rooms],
    )
    for (slot, room), contents in cells.items():
        table.loc[slot, room] = separator.join(contents)
    return table


def _cell_issues(session: GridSession, result: GridResult) -> List[str]:
    issues = []
    room = next(r for r in result.rooms if r.name == session.room)
    if room.capacity < session.capacity:
        issues.append(f"capacity: {session.capacity} > {room.capacity}")
    same_slot = [o for o in result.sessions if o is not session and o.slot == session.slot]
    same_room = [o for o in same_slot if o.room == session.room]
    if same_room:
        issues.append("scheduling: same room and slot as " + ", ".join(f"#{o.number}" for o in same_room))
    if has_track_conflict(session, same_slot):
        issues.append("track: " + ", ".join(
            f"#{o.number}" for o in same_slot if has_track_conflict(session, [o])
        ))
    return issues


def _html_cell(session: GridSession, result: GridResult) -> str:
    content = f"#{session.number} {html.escape(session.title)}"
    issues = _cell_issues(session, result)
    if not issues:
        return content
    return (
        f'<div class="issue">{content}'
        f'<br><small>{html.escape("; ".join(issues))}</small></div>'
    )


def grid_html(result: GridResult) -> str:
    """
    HTML table of the grid.

    Cells with a capacity violation, a double booking or a same-track
    collision in their slot get the "issue" class and list the problem.
    """
    table = grid_table(result, render=lambda s: _html_cell(s, result), separator="<br>")
    table.index = [html.escape(name) for name in table.index]
    table.columns = [html.escape(name) for name in table.columns]
    return table.to_html(escape=False, classes="grid", border=1)
