#!/usr/bin/env python3
"""
Field extraction primitives shared by every extractor.

Single point where regex failures are absorbed: an invalid pattern and a
pattern that does not occur in the text both come back as None.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Pattern, Tuple, Union

logger = logging.getLogger(__name__)

PatternLike = Union[str, Pattern[str]]


def _compile(pattern: PatternLike, flags: int = 0) -> Optional[Pattern[str]]:
    if isinstance(pattern, re.Pattern):
        if not flags or pattern.flags & flags == flags:
            return pattern
        # Extra flags on a precompiled pattern: recompile with both sets
        flags |= pattern.flags
        pattern = pattern.pattern
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        logger.warning("Regex error in %r: %s", pattern, e)
        return None


def _search(text: str, pattern: PatternLike, flags: int) -> Optional[re.Match]:
    regex = _compile(pattern, flags)
    if regex is None or not text:
        return None
    try:
        return regex.search(text)
    except (re.error, RecursionError) as e:
        logger.warning("Regex search failed for %r: %s", regex.pattern, e)
        return None


def extract_field(text: str, pattern: PatternLike, flags: int = 0) -> Optional[str]:
    """
    Return the first capture group of the first match, or the whole match
    when the pattern has no groups. None on no match or invalid pattern.
    """
    m = _search(text, pattern, flags)
    if m is None:
        return None
    if m.re.groups >= 1:
        return m.group(1)
    return m.group(0)


def extract_groups(text: str, pattern: PatternLike, flags: int = 0) -> Optional[Tuple[str, ...]]:
    """All capture groups of the first match, or None."""
    m = _search(text, pattern, flags)
    if m is None:
        return None
    groups = m.groups()
    if any(g is None for g in groups):
        return None
    return groups


def first_field(text: str, patterns: Iterable[PatternLike], flags: int = 0) -> Optional[str]:
    """Try patterns in order; return the first non-empty stripped result."""
    for pattern in patterns:
        value = extract_field(text, pattern, flags)
        if value is not None and value.strip():
            return value.strip()
    return None
