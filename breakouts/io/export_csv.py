"""CSV export of the grid."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from breakouts.domain.repositories import SessionRepository


def export_grid_csv(session: Session, csv_path: str | Path) -> int:
    """
    Export the current grid (one row per session) from the database.

    Returns:
        Number of sessions exported
    """
    records = SessionRepository.get_all(session)
    df = pd.DataFrame(
        [
            {"number": r.number, "title": r.title, "room": r.room, "slot": r.slot}
            for r in records
        ],
        columns=["number", "title", "room", "slot"],
    )
    df.to_csv(csv_path, index=False)
    return len(df)


def export_result_csv(frame: pd.DataFrame, csv_path: str | Path) -> int:
    """Write a suggested grid, as built by `report.sessions_frame`."""
    frame.to_csv(csv_path, index=False)
    return len(frame)
