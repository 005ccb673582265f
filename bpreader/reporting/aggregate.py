#!/usr/bin/env python3
"""
Reading collections across reports.

- reading_identity: stable key used to de-duplicate re-imported reports
- merge_readings: add unseen readings, newest first
- recent_means: averages over the last 30 days (or the 10 newest readings)
- date_range: first and last reading date
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

from bpreader.extraction.model import Reading

RECENT_DAYS = 30
FALLBACK_COUNT = 10


@dataclass(frozen=True)
class ReadingMeans:
    systolic_mean: int
    diastolic_mean: int
    heart_rate_mean: int


def reading_identity(reading: Reading) -> str:
    """e.g. "2024-01-05-08:15-120-75-62"."""
    return (
        f"{reading.date.isoformat()}-{reading.time}-"
        f"{reading.systolic}-{reading.diastolic}-{reading.heart_rate}"
    )


def _newest_first_key(reading: Reading):
    instant = reading.instant
    return instant or dt.datetime.combine(reading.date, dt.time.min)


def count_duplicates(existing: Iterable[Reading], incoming: Iterable[Reading]) -> int:
    seen: Set[str] = {reading_identity(r) for r in existing}
    return len({reading_identity(r) for r in incoming} & seen)


def merge_readings(existing: Iterable[Reading], incoming: Iterable[Reading]) -> List[Reading]:
    """
    Existing readings plus incoming readings not already present.

    Duplicates inside `incoming` collapse too. Result is newest first.
    """
    merged = list(existing)
    seen: Set[str] = {reading_identity(r) for r in merged}
    for r in incoming:
        key = reading_identity(r)
        if key in seen:
            continue
        seen.add(key)
        merged.append(r)
    merged.sort(key=_newest_first_key, reverse=True)
    return merged


def recent_means(readings: Iterable[Reading], today: dt.date) -> ReadingMeans:
    ordered = sorted(readings, key=_newest_first_key, reverse=True)
    if not ordered:
        return ReadingMeans(0, 0, 0)

    cutoff = today - dt.timedelta(days=RECENT_DAYS)
    window = [r for r in ordered if r.date >= cutoff] or ordered[:FALLBACK_COUNT]

    n = len(window)
    return ReadingMeans(
        systolic_mean=int(sum(r.systolic for r in window) / n),
        diastolic_mean=int(sum(r.diastolic for r in window) / n),
        heart_rate_mean=int(sum(r.heart_rate for r in window) / n),
    )


def date_range(readings: Iterable[Reading]) -> Optional[Tuple[dt.date, dt.date]]:
    dates = [r.date for r in readings]
    if not dates:
        return None
    return min(dates), max(dates)
