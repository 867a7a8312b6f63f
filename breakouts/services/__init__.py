"""Services around the grid engine."""

from .normalize import (
    GridDataError,
    PreserveDirective,
    apply_preserve,
    parse_except,
    parse_preserve,
    to_grid_rooms,
    to_grid_sessions,
    to_grid_slots,
)
from .validation import ValidationError, validate_grid, validate_session

__all__ = [
    "GridDataError",
    "PreserveDirective",
    "apply_preserve",
    "parse_except",
    "parse_preserve",
    "to_grid_rooms",
    "to_grid_sessions",
    "to_grid_slots",
    "ValidationError",
    "validate_grid",
    "validate_session",
]
