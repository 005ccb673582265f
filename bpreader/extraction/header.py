#!/usr/bin/env python3
"""
Header metadata extraction from the first report page.

Each field has an ordered pattern list, most specific first, most permissive
last. The first non-empty hit wins; a field with no hit gets the configured
"unknown" sentinel so downstream code only ever sees strings.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from bpreader.config import DEFAULT_CONFIG, EngineConfig
from bpreader.extraction.fields import extract_field, extract_groups, first_field
from bpreader.extraction.model import ReportMetadata, SummaryStats


_MONTH_NAMES = (
    "January|February|March|April|May|June|July|"
    "August|September|October|November|December"
)
_MONTH_ABBREV = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"

# ---------------------------------------------------------------------------
# Field patterns
# ---------------------------------------------------------------------------

_NAME_PATTERNS = [
    r"Monthly Report\s+([^\n]+)",
    r"(?:Member|Name)\s*:\s*([^\n]+)",
]

_EMAIL_PATTERNS = [
    r"([\w.+-]+@[\w.-]+\.[a-zA-Z]{2,})",
]

# Two groups each: (month, year)
_MONTH_YEAR_PATTERNS = [
    rf"\b({_MONTH_NAMES}),\s+(\d{{4}})\b",
    rf"\b({_MONTH_NAMES})\s+(\d{{4}})\b",
]
_MONTH_ONLY_PATTERN = rf"\b({_MONTH_NAMES})\b"
_YEAR_RE = re.compile(r"\b(\d{4})\b")

_GENDER_PATTERNS = [
    r"(?:Gender|Sex)\s*:?\s*(Male|Female)\b",
    r"\b(Male|Female)\b",
]

_DOB_PATTERNS = [
    rf"(?:Date of birth|DOB|Born)\s*:?\s*(\d{{1,2}}\s+(?:{_MONTH_ABBREV})[a-z]*\.?\s+\d{{4}})",
    rf"\b\d{{1,2}}\s+(?:{_MONTH_ABBREV})\s+\d{{4}}\b",
]

_HEIGHT_PATTERNS = [
    r"(\d+(?:\.\d+)?)\s*cm\b",
]

_WEIGHT_PATTERNS = [
    r"(\d+(?:\.\d+)?)\s*kg\b",
]


def _year_in_range(year: str, config: EngineConfig) -> bool:
    try:
        return config.min_year <= int(year) <= config.max_year
    except ValueError:
        return False


def extract_member_name(text: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    return first_field(text, _NAME_PATTERNS) or config.unknown_name


def extract_email(text: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    return first_field(text, _EMAIL_PATTERNS) or config.unknown_email


def extract_month_year(text: str, config: EngineConfig = DEFAULT_CONFIG) -> Tuple[str, str]:
    """
    Reporting month and year.

    Tries "Month, YYYY" then "Month YYYY"; falls back to the first month name
    and the first 4-digit year inside the configured range, matched separately.
    """
    for pattern in _MONTH_YEAR_PATTERNS:
        groups = extract_groups(text, pattern)
        if groups and _year_in_range(groups[1], config):
            return groups[0], groups[1]

    month = extract_field(text, _MONTH_ONLY_PATTERN)
    year: Optional[str] = None
    for m in _YEAR_RE.finditer(text or ""):
        if _year_in_range(m.group(1), config):
            year = m.group(1)
            break

    if month and year:
        return month, year
    return config.unknown, config.unknown


def extract_gender(text: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    return first_field(text, _GENDER_PATTERNS) or config.unknown


def extract_date_of_birth(text: str, config: EngineConfig = DEFAULT_CONFIG) -> str:
    return first_field(text, _DOB_PATTERNS) or config.unknown


def extract_physical_info(text: str, config: EngineConfig = DEFAULT_CONFIG) -> Tuple[str, str]:
    """(height_cm, weight_kg) as strings."""
    height = first_field(text, _HEIGHT_PATTERNS) or config.unknown
    weight = first_field(text, _WEIGHT_PATTERNS) or config.unknown
    return height, weight


def extract_report_metadata(
    text: str,
    config: EngineConfig = DEFAULT_CONFIG,
    summary_stats: Optional[SummaryStats] = None,
) -> ReportMetadata:
    month, year = extract_month_year(text, config)
    height, weight = extract_physical_info(text, config)
    return ReportMetadata(
        member_name=extract_member_name(text, config),
        email=extract_email(text, config),
        month=month,
        year=year,
        gender=extract_gender(text, config),
        date_of_birth=extract_date_of_birth(text, config),
        height=height,
        weight=weight,
        summary_stats=summary_stats,
    )


def missing_fields(metadata: ReportMetadata, config: EngineConfig = DEFAULT_CONFIG) -> List[str]:
    """Names of header fields that fell back to a sentinel."""
    sentinels = {config.unknown, config.unknown_name, config.unknown_email}
    names = ["member_name", "email", "month", "year", "gender", "date_of_birth", "height", "weight"]
    return [n for n in names if getattr(metadata, n) in sentinels]
