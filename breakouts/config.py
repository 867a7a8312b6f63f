"""Configuration for grid suggestions (YAML or JSON)."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List

import yaml


DB_URL_ENV = "BREAKOUTS_DB_URL"


@dataclass
class GridConfig:
    db_url: str = "sqlite:///breakouts.db"
    # Replaces the "don't know" (0) capacity so that it never matches any room
    default_capacity: int = 30
    default_duration: int = 60
    allowed_durations: List[int] = field(default_factory=lambda: [30, 60])
    track_prefix: str = "track: "
    seed_alphabet: str = "abcdefghijklmnopqrstuvwxyz"
    seed_length: int = 5
    default_room_capacity: int = 30


def load_config(path: str | Path | None = None) -> GridConfig:
    """
    Load configuration from a YAML or JSON file.

    Args:
        path: Path to the config file, or None for defaults

    Returns:
        GridConfig with file values applied, then environment overrides

    Raises:
        ValueError: If the file contains unknown keys or is not a mapping
    """
    data = {}
    if path is not None:
        p = Path(path)
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() == ".json":
            data = json.loads(text) or {}
        else:
            data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {p} must contain a mapping")

    known = {f.name for f in fields(GridConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    cfg = GridConfig(**data)
    if os.environ.get(DB_URL_ENV):
        cfg.db_url = os.environ[DB_URL_ENV]

    if cfg.default_capacity <= 0:
        raise ValueError("default_capacity must be a positive number of seats")
    if not cfg.seed_alphabet or cfg.seed_length <= 0:
        raise ValueError("seed_alphabet and seed_length must not be empty")
    cfg.allowed_durations = [int(d) for d in cfg.allowed_durations]
    return cfg
