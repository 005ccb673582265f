#!/usr/bin/env python3
"""
Blood pressure category classifier (ACC/AHA adult thresholds).

Stateless: every function takes values and returns a tag.

Categories:
  NORMAL        — SBP < 120 and DBP < 80
  ELEVATED      — SBP 120-129 and DBP < 80
  STAGE_1       — SBP 130-139 or DBP 80-89
  STAGE_2       — SBP >= 140 or DBP >= 90
  CRISIS        — SBP >= 180 or DBP >= 120
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional


class BPCategory(Enum):
    NORMAL = "Normal"
    ELEVATED = "Elevated"
    HYPERTENSION_STAGE_1 = "Hypertension Stage 1"
    HYPERTENSION_STAGE_2 = "Hypertension Stage 2"
    HYPERTENSIVE_CRISIS = "Hypertensive Crisis"

    @property
    def label(self) -> str:
        return self.value

    @property
    def search_terms(self) -> List[str]:
        return _CATEGORY_INFO[self]["search_terms"]

    @property
    def advice(self) -> str:
        return _CATEGORY_INFO[self]["advice"]


# ---------------------------------------------------------------------------
# Category definitions
# ---------------------------------------------------------------------------

_CATEGORY_INFO: Dict[BPCategory, Dict] = {
    BPCategory.NORMAL: {
        "search_terms": ["normal", "healthy", "good"],
        "advice": "Your blood pressure is in the normal range. Continue with healthy lifestyle habits.",
    },
    BPCategory.ELEVATED: {
        "search_terms": ["elevated", "borderline", "high normal"],
        "advice": "Your blood pressure is slightly elevated. Consider lifestyle changes and monitor regularly.",
    },
    BPCategory.HYPERTENSION_STAGE_1: {
        "search_terms": ["hypertension stage 1", "mild hypertension", "stage 1", "moderate"],
        "advice": "You have Stage 1 Hypertension. Consult with your healthcare provider and consider lifestyle changes.",
    },
    BPCategory.HYPERTENSION_STAGE_2: {
        "search_terms": ["hypertension stage 2", "stage 2", "severe", "high"],
        "advice": "You have Stage 2 Hypertension. Consult with your healthcare provider immediately for treatment options.",
    },
    BPCategory.HYPERTENSIVE_CRISIS: {
        "search_terms": ["crisis", "emergency", "critical", "dangerous", "very high", "severe"],
        "advice": (
            "MEDICAL EMERGENCY: Seek immediate medical attention if readings persist "
            "at this level or if you experience symptoms."
        ),
    },
}

_CATEGORY_ORDER = [
    BPCategory.NORMAL,
    BPCategory.ELEVATED,
    BPCategory.HYPERTENSION_STAGE_1,
    BPCategory.HYPERTENSION_STAGE_2,
    BPCategory.HYPERTENSIVE_CRISIS,
]


def classify(systolic: int, diastolic: int) -> BPCategory:
    """Category for one systolic/diastolic pair. Higher category wins."""
    if systolic >= 180 or diastolic >= 120:
        return BPCategory.HYPERTENSIVE_CRISIS
    if systolic >= 140 or diastolic >= 90:
        return BPCategory.HYPERTENSION_STAGE_2
    if systolic >= 130 or diastolic >= 80:
        return BPCategory.HYPERTENSION_STAGE_1
    if systolic >= 120:
        return BPCategory.ELEVATED
    return BPCategory.NORMAL


def match_category(term: str) -> Optional[BPCategory]:
    """First category (mildest first) whose label or search terms contain `term`."""
    needle = (term or "").strip().lower()
    if not needle:
        return None
    for category in _CATEGORY_ORDER:
        if needle in category.label.lower():
            return category
        if any(needle in t for t in category.search_terms):
            return category
    return None


# ---------------------------------------------------------------------------
# Per-metric severity bands: "low", "normal", "elevated", "high", "very_high"
# ---------------------------------------------------------------------------

def systolic_band(value: int) -> str:
    if value >= 160:
        return "very_high"
    if value >= 140:
        return "high"
    if value >= 120:
        return "elevated"
    return "normal"


def diastolic_band(value: int) -> str:
    if value >= 100:
        return "very_high"
    if value >= 90:
        return "high"
    if value >= 80:
        return "elevated"
    return "normal"


def heart_rate_band(value: int) -> str:
    if value >= 100:
        return "very_high"
    if value >= 90:
        return "high"
    if value <= 50:
        return "low"
    return "normal"


def category_counts(pairs) -> Dict[BPCategory, int]:
    """Count categories over an iterable of (systolic, diastolic) pairs."""
    counts: Dict[BPCategory, int] = {c: 0 for c in _CATEGORY_ORDER}
    for systolic, diastolic in pairs:
        counts[classify(systolic, diastolic)] += 1
    return counts
