#!/usr/bin/env python3
"""
bpreader — Report Extraction Data Models

Defines the core data structures for the extraction engine:
- Reading: one blood-pressure measurement recovered from a table row
- ReadingType: how a measurement was taken (icon caption near the row)
- SummaryStats: daytime / night-time / overall means from the summary table
- ReportMetadata: header fields from the first page
- Report: metadata + ordered readings, handed to the caller as a value
- ExtractionIssue: a recoverable problem absorbed during a parse
- ParseFailure: the only non-Report outcome of a parse

Design:
- Immutable: every model is a frozen dataclass, sequences are tuples
- Fail-soft: missing header fields carry an explicit "unknown" sentinel, never None
- Source order: readings keep page → stream → match order
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from bpreader.extraction.datetimes import compose_instant, month_abbreviation


class ReadingType(Enum):
    """How a reading was taken, inferred from captions near the table row."""
    NORMAL = "normal"
    INITIALIZATION = "initialization"
    CUFF_MEASUREMENT = "cuff_measurement"
    ON_DEMAND_PHONE = "on_demand_phone"

    @property
    def label(self) -> str:
        return _READING_TYPE_LABELS[self]


_READING_TYPE_LABELS = {
    ReadingType.NORMAL: "Normal",
    ReadingType.INITIALIZATION: "Initialization with cuff",
    ReadingType.CUFF_MEASUREMENT: "Cuff measurement",
    ReadingType.ON_DEMAND_PHONE: "On demand phone measurement",
}


class ParseState(Enum):
    """Report assembler states."""
    START = "START"
    HEADER_PARSED = "HEADER_PARSED"
    PER_PAGE_ACCUMULATING = "PER_PAGE_ACCUMULATING"
    ASSEMBLED = "ASSEMBLED"
    FAILED = "FAILED"


class ParseFailureReason(Enum):
    """Why a document produced no Report."""
    DOCUMENT_UNREADABLE = "DOCUMENT_UNREADABLE"
    NO_HEADER_PAGE = "NO_HEADER_PAGE"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Reading:
    """A single blood-pressure measurement.

    Attributes:
        date: Calendar day of the measurement (no time component)
        time: "HH:mm" string exactly as it appeared in the table
        systolic: Systolic pressure (mmHg); 0 if the cell did not parse
        diastolic: Diastolic pressure (mmHg); 0 if the cell did not parse
        heart_rate: Pulse (bpm); 0 if the cell did not parse
        reading_type: Measurement method
    """
    date: dt.date
    time: str
    systolic: int
    diastolic: int
    heart_rate: int
    reading_type: ReadingType = ReadingType.NORMAL

    @property
    def instant(self) -> Optional[dt.datetime]:
        """Date and time combined, or None when the time string is unusable."""
        return compose_instant(self.date, self.time)

    @property
    def formatted_datetime(self) -> str:
        """e.g. "5 Jan 2024 08:15" (English month names regardless of locale)."""
        return f"{self.date.day} {month_abbreviation(self.date.month)} {self.date.year} {self.time}"


@dataclass(frozen=True)
class SummaryStats:
    """Means from the report's "Summary table" section."""
    daytime_systolic_mean: int
    daytime_diastolic_mean: int
    daytime_heart_rate_mean: int
    nighttime_systolic_mean: int
    nighttime_diastolic_mean: int
    nighttime_heart_rate_mean: int
    overall_systolic_mean: int
    overall_diastolic_mean: int
    overall_heart_rate_mean: int


@dataclass(frozen=True)
class ReportMetadata:
    """Header fields from the first page.

    Every text field is always populated; extraction misses carry the
    configured "unknown" sentinel instead of None.
    """
    member_name: str
    email: str
    month: str
    year: str
    gender: str
    date_of_birth: str
    height: str
    weight: str
    summary_stats: Optional[SummaryStats] = None


@dataclass(frozen=True)
class ExtractionIssue:
    """A recoverable problem absorbed during a parse.

    Attributes:
        stage: Pipeline stage ("header", "summary", "page", "row", "time")
        category: "missing", "unreadable", "dropped", "defaulted"
        description: Factual description of what happened
        page_index: Zero-based page index, when the issue is page-scoped
    """
    stage: str
    category: str
    description: str
    page_index: Optional[int] = None


@dataclass(frozen=True)
class Report:
    """One parsed document: header metadata plus every reading found."""
    metadata: ReportMetadata
    readings: Tuple[Reading, ...] = ()
    page_count: int = 0
    issues: Tuple[ExtractionIssue, ...] = ()

    def chronological(self) -> Tuple[Reading, ...]:
        """Readings with a usable instant, oldest first.

        Ties keep source order. Readings whose time does not compose into an
        instant are left out of this view but remain in ``readings``.
        """
        timed = [(r.instant, idx, r) for idx, r in enumerate(self.readings)]
        timed = [t for t in timed if t[0] is not None]
        timed.sort(key=lambda t: (t[0], t[1]))
        return tuple(r for _, _, r in timed)


@dataclass(frozen=True)
class ParseFailure:
    """Returned instead of a Report when a document cannot be parsed.

    Attributes:
        reason: Failure category
        message: Human-readable explanation
        partial_readings: Readings accumulated before a cancellation (empty otherwise)
    """
    reason: ParseFailureReason
    message: str
    partial_readings: Tuple[Reading, ...] = ()
