#!/usr/bin/env python3
"""
Summary table extraction.

Format (text order after the "Summary table" marker):
    Daytime ... Mean 128 82 71
    Night-time ... Mean 115 70 60
    All measurements ... Mean 124 79 68

Columns are systolic, diastolic, heart rate. A row that cannot be found
contributes zeros; a missing marker means there is no summary at all.
"""
from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Tuple

from bpreader.config import DEFAULT_CONFIG, EngineConfig
from bpreader.extraction.fields import extract_groups
from bpreader.extraction.model import SummaryStats

logger = logging.getLogger(__name__)

SUMMARY_ROWS = ("Daytime", "Night-time", "All measurements")


def _row_pattern(label: str) -> re.Pattern:
    return re.compile(re.escape(label) + r".*?Mean\s+(\d+)\s+(\d+)\s+(\d+)", re.DOTALL)


_ROW_PATTERNS = {label: _row_pattern(label) for label in SUMMARY_ROWS}


def _row_means(table_text: str, label: str) -> Tuple[int, int, int]:
    groups = extract_groups(table_text, _ROW_PATTERNS[label])
    if groups is None:
        logger.warning("Summary row %r not found; using zeros", label)
        return 0, 0, 0
    try:
        sys_, dia, hr = (int(g) for g in groups)
    except ValueError:
        return 0, 0, 0
    return sys_, dia, hr


def extract_summary_rows(text: str, config: EngineConfig = DEFAULT_CONFIG) -> Optional[Dict[str, Tuple[int, int, int]]]:
    """Per-row (sys, dia, hr) means, or None when the marker is absent."""
    idx = (text or "").find(config.summary_marker)
    if idx < 0:
        return None
    table_text = text[idx + len(config.summary_marker):]
    return {label: _row_means(table_text, label) for label in SUMMARY_ROWS}


def extract_summary_stats(text: str, config: EngineConfig = DEFAULT_CONFIG) -> Optional[SummaryStats]:
    rows = extract_summary_rows(text, config)
    if rows is None:
        logger.warning("Summary table not found in text")
        return None

    day = rows["Daytime"]
    night = rows["Night-time"]
    overall = rows["All measurements"]
    return SummaryStats(
        daytime_systolic_mean=day[0],
        daytime_diastolic_mean=day[1],
        daytime_heart_rate_mean=day[2],
        nighttime_systolic_mean=night[0],
        nighttime_diastolic_mean=night[1],
        nighttime_heart_rate_mean=night[2],
        overall_systolic_mean=overall[0],
        overall_diastolic_mean=overall[1],
        overall_heart_rate_mean=overall[2],
    )
