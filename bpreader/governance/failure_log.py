#!/usr/bin/env python3
"""
bpreader Extraction Failure Log — append-only observational record.

Records every issue a parse absorbed (skipped pages, dropped rows, defaulted
header fields) and every fatal parse failure, one JSON object per line.
Never modifies parse behavior — purely observational.

Storage: JSON Lines format at outputs/extraction_failures.jsonl

Categories (from ExtractionIssue.category, plus "fatal"):
- missing: expected content not found (summary table, page rows)
- unreadable: page text unavailable
- dropped: a matched row was discarded
- defaulted: a field fell back to its sentinel / zero
- unsortable: time could not be combined with date
- fatal: the document produced no Report
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from bpreader.extraction.model import ExtractionIssue, ParseFailure, Report


@dataclass
class FailureEntry:
    """A single extraction failure record."""
    timestamp: str           # ISO 8601 timestamp
    document: str            # Document handle (usually a file path)
    stage: str               # "header", "summary", "page", "row", "time", "document"
    category: str            # see module docstring
    description: str         # Factual, non-interpretive description
    page_index: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None


_DEFAULT_LOG_PATH = Path("outputs") / "extraction_failures.jsonl"


class FailureLog:
    """Append-only extraction failure log."""

    def __init__(self, log_path: Optional[Path] = None):
        self._path = log_path or _DEFAULT_LOG_PATH

    @property
    def path(self) -> Path:
        return self._path

    def append(self, entry: FailureEntry) -> None:
        """Append a failure entry to the log file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        record = asdict(entry)
        # Remove None values for cleaner output
        record = {k: v for k, v in record.items() if v is not None}
        with open(self._path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, default=str) + "\n")

    def read_all(self) -> List[FailureEntry]:
        """Read all failure entries from the log file."""
        if not self._path.exists():
            return []

        entries: List[FailureEntry] = []
        with open(self._path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError:
                    continue  # Skip malformed lines
                entries.append(FailureEntry(
                    timestamp=data.get("timestamp", ""),
                    document=data.get("document", ""),
                    stage=data.get("stage", ""),
                    category=data.get("category", ""),
                    description=data.get("description", ""),
                    page_index=data.get("page_index"),
                    metadata=data.get("metadata"),
                ))

        return entries

    def summary(self) -> Dict[str, int]:
        """Return counts by category."""
        counts: Dict[str, int] = {}
        for entry in self.read_all():
            counts[entry.category] = counts.get(entry.category, 0) + 1
        return counts


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------

def log_issue(log: FailureLog, document: str, issue: ExtractionIssue) -> None:
    log.append(FailureEntry(
        timestamp=datetime.now().isoformat(),
        document=document,
        stage=issue.stage,
        category=issue.category,
        description=issue.description,
        page_index=issue.page_index,
    ))


def log_report_issues(log: FailureLog, document: str, report: Report) -> int:
    """Append every issue recorded on a Report. Returns the number written."""
    for issue in report.issues:
        log_issue(log, document, issue)
    return len(report.issues)


def log_parse_failure(log: FailureLog, document: str, failure: ParseFailure) -> None:
    log.append(FailureEntry(
        timestamp=datetime.now().isoformat(),
        document=document,
        stage="document",
        category="fatal",
        description=failure.message,
        metadata={
            "reason": failure.reason.value,
            "partial_readings": len(failure.partial_readings),
        },
    ))
