#!/usr/bin/env python3
"""
bpreader — Engine Configuration

Defaults reproduce the reference report behavior. A JSON file of overrides
can be loaded for report dialects that differ in minor ways:

    {"type_context_chars": 120, "max_year": 2040}

Design:
- Frozen: one config instance can be shared by concurrent engines
- Minimal validation (fail-closed on unknown keys)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict


@dataclass(frozen=True)
class EngineConfig:
    # Characters searched either side of a row's start for type captions
    type_context_chars: int = 100
    # Pages before this index are header pages
    first_reading_page: int = 1

    # Header sentinels
    unknown_name: str = "Unknown User"
    unknown_email: str = "unknown@email.com"
    unknown: str = "Unknown"

    # Month/year fallback accepts any year in this range
    min_year: int = 1900
    max_year: int = 2099

    summary_marker: str = "Summary table"


DEFAULT_CONFIG = EngineConfig()


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"Missing JSON: {path}")
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON: {path}\n{e}")


def load_config(path: Path) -> EngineConfig:
    obj = _read_json(Path(path))
    if not isinstance(obj, dict):
        raise SystemExit(f"{path}: config must be a JSON object")

    known = {f.name: f for f in fields(EngineConfig)}
    unknown_keys = sorted(set(obj) - set(known))
    if unknown_keys:
        raise SystemExit(f"{path}: unknown config keys {unknown_keys}")

    for key, value in obj.items():
        expected = type(getattr(DEFAULT_CONFIG, key))
        if not isinstance(value, expected) or isinstance(value, bool):
            raise SystemExit(f"{path}: {key} must be {expected.__name__}")

    cfg = replace(DEFAULT_CONFIG, **obj)
    if cfg.min_year > cfg.max_year:
        raise SystemExit(f"{path}: min_year must not exceed max_year")
    if cfg.type_context_chars < 0 or cfg.first_reading_page < 1:
        raise SystemExit(f"{path}: type_context_chars >= 0 and first_reading_page >= 1 required")
    return cfg
