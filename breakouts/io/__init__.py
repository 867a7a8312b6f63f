"""I/O utilities for CSV import/export."""

from .import_csv import import_rooms_csv, import_sessions_csv, import_slots_csv
from .export_csv import export_grid_csv, export_result_csv

__all__ = [
    "import_sessions_csv",
    "import_rooms_csv",
    "import_slots_csv",
    "export_grid_csv",
    "export_result_csv",
]
