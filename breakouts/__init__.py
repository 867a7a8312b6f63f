"""Breakout grid suggestions: assign sessions to rooms and slots.

Modules:
- config: load and validate configuration (YAML or JSON)
- constraints: conflict predicates (track, chair, session, duration, capacity)
- shuffle: seeded shuffle of the session list
- domain: project records, engine value types, repositories
- services: record normalization, preserve directives, validation
- engine: home rooms, slot/room assignment, relaxation ladder, orchestrator
- report: console, table and HTML views of a grid
- io: CSV import/export
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "constraints",
    "shuffle",
    "domain",
    "services",
    "engine",
    "report",
    "io",
    "cli",
]
