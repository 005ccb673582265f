#!/usr/bin/env python3
"""
Two-column page splitting.

Reading pages print two tables side by side (first half of the month on
the left, second half on the right). Extracted text interleaves them by
visual row, so one physical line can hold a left row and a right row:

    DATE TIME SBP DBP HR DATE TIME SBP DBP HR
    1 Mar, 24 07:02 121 77 64    16 Mar, 24 07:10 118 74 61

Pipeline:
1. Detect the doubled column header. Absent → the page is one stream.
2. Tokenize the text after the header into physical lines.
3. Classify each line's shape (two readings or anything else).
4. Two-reading lines are cut at their midpoint; the halves go to the left
   and right streams. Every other line goes to the left stream whole.
"""
from __future__ import annotations

import logging
import re
from enum import Enum
from typing import List, Tuple

logger = logging.getLogger(__name__)

DUAL_HEADER_RE = re.compile(
    r"DATE\s+TIME\s+SBP\s+DBP\s+HR\s+DATE\s+TIME\s+SBP\s+DBP\s+HR"
)

# A full row followed by the date of a second row on the same line
TWO_READING_LINE_RE = re.compile(
    r"(\d{1,2})\s+[A-Za-z]+\.?,\s+(\d{2})\s+(\d{1,2}:\d{2})\s+"
    r"(\d{2,3})\s+(\d{2,3})\s+(\d{2,3})\s+"
    r"(\d{1,2})\s+[A-Za-z]+\.?,\s+(\d{2})"
)


class LineShape(Enum):
    TWO_READINGS = "TWO_READINGS"
    OTHER = "OTHER"


def find_dual_header(page_text: str) -> int:
    """End offset of the doubled header, or -1."""
    m = DUAL_HEADER_RE.search(page_text or "")
    return m.end() if m else -1


def tokenize_lines(text: str) -> List[str]:
    return re.split(r"\r\n|\r|\n", text)


def classify_line(line: str) -> LineShape:
    if TWO_READING_LINE_RE.search(line):
        return LineShape.TWO_READINGS
    return LineShape.OTHER


def split_line(line: str) -> Tuple[str, str]:
    mid = len(line) // 2
    return line[:mid], line[mid:]


def split_into_columns(page_text: str) -> List[str]:
    """
    One stream for single-column pages, [left, right] for dual-table pages.

    The left stream is seeded with everything up to and including the
    doubled header so captions printed above the tables stay in context.
    """
    header_end = find_dual_header(page_text)
    if header_end < 0:
        return [page_text]

    left: List[str] = [page_text[:header_end]]
    right: List[str] = []
    split_count = 0

    for line in tokenize_lines(page_text[header_end:]):
        if classify_line(line) is LineShape.TWO_READINGS:
            left_half, right_half = split_line(line)
            left.append(left_half + "\n")
            right.append(right_half + "\n")
            split_count += 1
        else:
            left.append(line + "\n")

    logger.debug("Split %d two-reading lines into left/right streams", split_count)
    return ["".join(left), "".join(right)]
