#!/usr/bin/env python3
"""
Post-parse plausibility review.

Optional layer over a parsed Report. Never changes the Report; it only
reports what a reviewer should look at before the readings are accepted:
- values outside physiologically reasonable ranges (often misread cells)
- readings in the Hypertensive Crisis category
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from bpreader.classification.bp_categories import BPCategory, category_counts
from bpreader.extraction.model import Reading, Report

_REASONABLE_RANGES: Dict[str, Tuple[int, int]] = {
    "systolic": (50, 300),
    "diastolic": (30, 200),
    "heart_rate": (20, 250),
}


@dataclass(frozen=True)
class ReviewFlag:
    """One questionable value on one reading."""
    reading_index: int
    metric: str
    value: int
    reason: str


@dataclass
class ReviewResult:
    flags: List[ReviewFlag] = field(default_factory=list)
    crisis_count: int = 0
    category_counts: Dict[BPCategory, int] = field(default_factory=dict)

    @property
    def needs_attention(self) -> bool:
        return bool(self.flags) or self.crisis_count > 0


def is_reasonable(metric: str, value: int) -> bool:
    lo, hi = _REASONABLE_RANGES.get(metric, (0, 9999))
    return lo <= value <= hi


def implausible_values(readings: List[Reading]) -> List[ReviewFlag]:
    flags: List[ReviewFlag] = []
    for idx, r in enumerate(readings):
        for metric in ("systolic", "diastolic", "heart_rate"):
            value = getattr(r, metric)
            if not is_reasonable(metric, value):
                lo, hi = _REASONABLE_RANGES[metric]
                flags.append(ReviewFlag(idx, metric, value, f"outside {lo}-{hi}"))
        if r.systolic and r.diastolic and r.diastolic >= r.systolic:
            flags.append(ReviewFlag(idx, "diastolic", r.diastolic, "not below systolic"))
    return flags


def review_report(report: Report) -> ReviewResult:
    readings = list(report.readings)
    counts = category_counts((r.systolic, r.diastolic) for r in readings)
    return ReviewResult(
        flags=implausible_values(readings),
        crisis_count=counts[BPCategory.HYPERTENSIVE_CRISIS],
        category_counts=counts,
    )
