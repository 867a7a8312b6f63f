"""Command-line interface for breakout grid suggestions."""

from __future__ import annotations

import argparse
from pathlib import Path

from breakouts.config import load_config
from breakouts.domain.db import get_session, init_database
from breakouts.domain.repositories import RoomRepository, SessionRepository, SlotRepository
from breakouts.engine.orchestrator import build_grid
from breakouts.io.export_csv import export_grid_csv, export_result_csv
from breakouts.io.import_csv import import_rooms_csv, import_sessions_csv, import_slots_csv
from breakouts.report import format_report, grid_html, sessions_frame
from breakouts.services.normalize import (
    PreserveDirective,
    parse_except,
    parse_preserve,
    to_grid_rooms,
    to_grid_sessions,
    to_grid_slots,
)
from breakouts.services.validation import SCHEDULING_PROBLEMS, validate_grid, validate_session


def _preserve_arg(value: str) -> PreserveDirective:
    try:
        return parse_preserve(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _except_arg(value: str) -> list[int]:
    try:
        return parse_except(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _db_url(args: argparse.Namespace, cfg) -> str:
    return args.db or cfg.db_url


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    cfg = load_config(args.config)
    db_url = _db_url(args, cfg)
    init_database(db_url)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import CSV data into database."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        if args.rooms:
            count = import_rooms_csv(session, args.rooms, cfg.default_room_capacity)
            print(f"[OK] Imported {count} rooms")

        if args.slots:
            count = import_slots_csv(session, args.slots)
            print(f"[OK] Imported {count} slots")

        if args.sessions:
            count = import_sessions_csv(session, args.sessions)
            print(f"[OK] Imported {count} sessions")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_suggest(args: argparse.Namespace) -> None:
    """Suggest a grid, print it, and optionally apply it."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    directive = args.preserve or PreserveDirective()
    directive.except_ids = args.except_ids

    try:
        result = build_grid(session, cfg, directive=directive, seed=args.seed, apply=args.apply)

        print()
        print(format_report(result))

        if args.html:
            Path(args.html).write_text(grid_html(result), encoding="utf-8")
            print(f"[OK] HTML grid written to {args.html}")
        if args.out:
            count = export_result_csv(sessions_frame(result), args.out)
            print(f"[OK] Exported {count} sessions to {args.out}")

        session.close()
        if result.unscheduled:
            print(f"[WARN] {len(result.unscheduled)} session(s) could not be scheduled")
        print(f"[OK] Reproduce this grid with --seed {result.seed}")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Grid suggestion failed: {e}")
        raise


def _cmd_validate(args: argparse.Namespace) -> None:
    """Validate the current grid, or a single session."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))
    # A single session is checked for everything unless a scope is given
    scope = args.scope or ("everything" if args.session is not None else "scheduling")

    try:
        rooms = to_grid_rooms(RoomRepository.get_all(session), cfg)
        slots = to_grid_slots(SlotRepository.get_all(session))
        sessions = to_grid_sessions(SessionRepository.get_all(session), cfg)
        if args.session is None:
            errors = validate_grid(sessions, rooms, slots, cfg)
        else:
            if args.session not in {s.number for s in sessions}:
                raise LookupError(f"Session #{args.session} not found")
            errors = validate_session(args.session, sessions, rooms, slots, cfg)
        errors = [e for e in errors if scope == "everything" or e.label in SCHEDULING_PROBLEMS]
        session.close()

        for error in errors:
            print(f"- #{error.session} {error.label}: {', '.join(error.messages)}")
        print(f"[OK] {len(errors)} problem(s) found")

    except Exception as e:
        session.close()
        print(f"[ERROR] Validation failed: {e}")
        raise


def _cmd_export(args: argparse.Namespace) -> None:
    """Export the current grid from database to CSV."""
    cfg = load_config(args.config)
    session = get_session(_db_url(args, cfg))

    try:
        count = export_grid_csv(session, args.grid)
        session.close()
        print(f"[OK] Exported {count} sessions to {args.grid}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="breakouts",
        description="Suggest a room and slot grid for breakout sessions",
    )

    # Global options
    parser.add_argument("--db", help="Database URL (default: from config, sqlite:///breakouts.db)")
    parser.add_argument("--config", help="Path to config YAML or JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    imp = sub.add_parser("import-csv", help="Import CSV data into database")
    imp.add_argument("--sessions", help="Path to sessions CSV")
    imp.add_argument("--rooms", help="Path to rooms CSV")
    imp.add_argument("--slots", help="Path to slots CSV")
    imp.set_defaults(func=_cmd_import_csv)

    sug = sub.add_parser("suggest", help="Suggest a grid")
    sug.add_argument(
        "--preserve",
        type=_preserve_arg,
        default=None,
        help='Sessions whose room and slot are kept: "all", "none" (default) or e.g. 12,15',
    )
    sug.add_argument(
        "--except",
        dest="except_ids",
        type=_except_arg,
        default=[],
        help='Sessions removed from the preserved set: "none" (default) or e.g. 12,15',
    )
    sug.add_argument("--apply", action="store_true", help="Write the suggested grid back")
    sug.add_argument("--seed", help="Seed string for the session shuffle")
    sug.add_argument("--html", help="Optional: write an HTML view of the grid")
    sug.add_argument("--out", help="Optional: export the suggested grid to CSV")
    sug.set_defaults(func=_cmd_suggest)

    val = sub.add_parser("validate", help="Validate the current grid or one session")
    val.add_argument("--session", type=int, help="Only validate this session number")
    val.add_argument(
        "--scope",
        choices=["scheduling", "everything"],
        default=None,
        help="Report scheduling problems only (default for the grid) or everything (default for --session)",
    )
    val.set_defaults(func=_cmd_validate)

    exp = sub.add_parser("export", help="Export the current grid to CSV")
    exp.add_argument("--grid", required=True, help="Path to export grid CSV")
    exp.set_defaults(func=_cmd_export)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
