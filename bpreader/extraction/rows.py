#!/usr/bin/env python3
"""
Reading row extraction from one column stream.

Row format (left to right):
    5 Jan, 24   08:15   120   75   62
    day month, yy  time  SBP  DBP  HR

Reading type is not part of the row. The report prints it as an icon with
a caption that lands somewhere near the row in extracted text, so the type
is inferred from a character window around the row's start offset.
"""
from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional

from bpreader.config import DEFAULT_CONFIG, EngineConfig
from bpreader.extraction.datetimes import build_date
from bpreader.extraction.model import ExtractionIssue, Reading, ReadingType

logger = logging.getLogger(__name__)

ROW_RE = re.compile(
    r"(\d{1,2})\s+([A-Za-z]+)\.?,\s+(\d{2})\s+"   # day, month, yy
    r"(\d{1,2}:\d{2})\s+"                         # time
    r"(\d{1,3})\s+(\d{1,3})\s+(\d{1,3})\b"        # SBP, DBP, HR
)

# Priority order: first caption found in the window wins
_TYPE_MARKERS = [
    ("Initialization with cuff", ReadingType.INITIALIZATION),
    ("Cuff measurement", ReadingType.CUFF_MEASUREMENT),
    ("On demand phone measurement", ReadingType.ON_DEMAND_PHONE),
]


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def iter_row_matches(text: str) -> Iterator[re.Match]:
    """Row-shaped matches in text order."""
    return ROW_RE.finditer(text or "")


def classify_reading_type(text: str, offset: int, window: int = 100) -> ReadingType:
    """Look for a type caption within `window` characters of `offset`."""
    lo = max(0, offset - window)
    hi = min(len(text), offset + window)
    context = text[lo:hi]
    for marker, reading_type in _TYPE_MARKERS:
        if marker in context:
            logger.debug("Found %s caption near offset %d", reading_type.value, offset)
            return reading_type
    return ReadingType.NORMAL


def reading_from_match(text: str, m: re.Match, config: EngineConfig = DEFAULT_CONFIG) -> Optional[Reading]:
    """
    Build a Reading from a row match.

    An unusable date drops the row (it carries the ordering key). A bad
    numeric cell only zeroes that cell.
    """
    day, month, year, time_str, sbp, dbp, hr = m.groups()
    date = build_date(day, month, year)
    if date is None:
        return None
    return Reading(
        date=date,
        time=time_str,
        systolic=_to_int(sbp),
        diastolic=_to_int(dbp),
        heart_rate=_to_int(hr),
        reading_type=classify_reading_type(text, m.start(), config.type_context_chars),
    )


def extract_readings(
    text: str,
    config: EngineConfig = DEFAULT_CONFIG,
    issues: Optional[List[ExtractionIssue]] = None,
    page_index: Optional[int] = None,
) -> List[Reading]:
    """
    All readings in one stream, in match order.

    Dropped rows are logged and, when `issues` is given, recorded there.
    """
    readings: List[Reading] = []
    for m in iter_row_matches(text):
        reading = reading_from_match(text, m, config)
        if reading is None:
            day, month, year = m.group(1), m.group(2), m.group(3)
            logger.warning("Failed to create date from components: %s %s %s", day, month, year)
            if issues is not None:
                issues.append(ExtractionIssue(
                    stage="row",
                    category="dropped",
                    description=f"Unusable date '{day} {month}, {year}' in row '{m.group(0).strip()}'",
                    page_index=page_index,
                ))
            continue
        readings.append(reading)
    return readings
