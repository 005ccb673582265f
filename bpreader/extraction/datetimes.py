#!/usr/bin/env python3
"""
Calendar helpers for report tables.

- month_number: "Jan" / "January" / "Sept" → 1..12
- month_abbreviation: 1..12 → "Jan".."Dec"
- build_date: day + month name + 2- or 4-digit year → date
- compose_instant: date + "HH:mm" → datetime

All helpers return None on bad input; callers decide whether that drops a row.
"""
from __future__ import annotations

import datetime as dt
import re
from typing import Optional

_MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_number(name: str) -> Optional[int]:
    """Map an English month name or abbreviation to 1..12."""
    return _MONTHS.get((name or "").strip().rstrip(".").lower())


def month_abbreviation(month: int) -> str:
    """1..12 → "Jan".."Dec"."""
    return _MONTH_ABBREVIATIONS[month - 1]


def build_date(day: str, month: str, year: str) -> Optional[dt.date]:
    """
    Build a calendar date from table cells.

    Two-digit years are read as 20yy, matching the report exporter.
    Returns None for unknown month names or impossible dates (31 Feb).
    """
    month_idx = month_number(month)
    if month_idx is None:
        return None
    try:
        day_num = int(day)
        year_num = int(year)
    except (TypeError, ValueError):
        return None
    if len(year.strip()) == 2:
        year_num += 2000
    try:
        return dt.date(year_num, month_idx, day_num)
    except ValueError:
        return None


def parse_time_of_day(value: str) -> Optional[dt.time]:
    m = _TIME_RE.match((value or "").strip())
    if not m:
        return None
    try:
        return dt.time(int(m.group(1)), int(m.group(2)))
    except ValueError:
        return None


def compose_instant(date: dt.date, time_str: str) -> Optional[dt.datetime]:
    """
    Combine a calendar date with an "HH:mm" string.

    Returns None if the time is malformed or the calendar rejects the
    recombined components.
    """
    tod = parse_time_of_day(time_str)
    if tod is None or date is None:
        return None
    try:
        return dt.datetime(date.year, date.month, date.day, tod.hour, tod.minute)
    except ValueError:
        return None
