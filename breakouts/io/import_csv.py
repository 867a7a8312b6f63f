"""CSV import utilities to load project data into the database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from breakouts.domain.models import BreakoutSession, Room, Slot
from breakouts.services.normalize import parse_room_name, parse_slot_name


def _text(row: pd.Series, column: str) -> str | None:
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def import_sessions_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import breakout sessions from CSV into database.

    Expected columns: number, title, and optionally labels, chairs,
    conflicts, duration, capacity, room, slot.

    Returns:
        Number of sessions imported
    """
    df = pd.read_csv(csv_path)

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()

    records = []
    for _, row in df.iterrows():
        record = BreakoutSession(
            number=int(row["number"]),
            title=str(row["title"]),
            labels=_text(row, "labels"),
            chairs=_text(row, "chairs"),
            conflicts=_text(row, "conflicts"),
            duration=int(row["duration"]) if pd.notna(row.get("duration")) else None,
            capacity=int(row["capacity"]) if pd.notna(row.get("capacity")) else 0,
            room=_text(row, "room"),
            slot=_text(row, "slot"),
        )
        records.append(record)

    session.add_all(records)
    session.commit()

    print(f"[INFO] Imported {len(records)} sessions from {csv_path}")
    return len(records)


def import_rooms_csv(session: Session, csv_path: str | Path, default_capacity: int = 30) -> int:
    """
    Import rooms from CSV into database.

    Only a `name` column is required; capacity is read from a "Name (NN)"
    suffix when no `capacity` column gives it.

    Returns:
        Number of rooms imported
    """
    df = pd.read_csv(csv_path)
    df.columns = df.columns.str.lower().str.strip()

    rooms = []
    for pos, (_, row) in enumerate(df.iterrows()):
        name = str(row["name"]).strip()
        label, capacity = parse_room_name(name, default_capacity)
        if pd.notna(row.get("capacity")):
            capacity = int(row["capacity"])
        rooms.append(Room(name=name, label=_text(row, "label") or label, capacity=capacity, pos=pos))

    session.add_all(rooms)
    session.commit()

    print(f"[INFO] Imported {len(rooms)} rooms from {csv_path}")
    return len(rooms)


def import_slots_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import slots from CSV into database.

    Slot names follow "HH:mm - HH:mm"; a `duration` column overrides the
    duration computed from the name.

    Raises:
        ValueError: If a slot has neither a duration nor a time-range name

    Returns:
        Number of slots imported
    """
    df = pd.read_csv(csv_path)
    df.columns = df.columns.str.lower().str.strip()

    slots = []
    for pos, (_, row) in enumerate(df.iterrows()):
        name = str(row["name"]).strip()
        parsed = parse_slot_name(name)
        start, end, duration = parsed if parsed else (None, None, None)
        if pd.notna(row.get("duration")):
            duration = int(row["duration"])
        if duration is None:
            raise ValueError(f"Slot \"{name}\" has no duration and is not a time range")
        slots.append(Slot(name=name, start=start, end=end, duration=duration, pos=pos))

    session.add_all(slots)
    session.commit()

    print(f"[INFO] Imported {len(slots)} slots from {csv_path}")
    return len(slots)
