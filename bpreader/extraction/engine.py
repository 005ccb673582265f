#!/usr/bin/env python3
"""
bpreader — Report Assembler

Turns a document's page texts into one Report:

    START ──page 0 text──▶ HEADER_PARSED ──▶ PER_PAGE_ACCUMULATING ──▶ ASSEMBLED
      │                                          │ (loops pages 1..n-1)
      └──── no page count / no page 0 ──▶ FAILED ◀── cancellation token

Failure policy:
- Fatal: the document or its first page cannot be read → ParseFailure
- Per page: unreadable page or zero rows → skipped, recorded as an issue
- Per row: unusable date → row dropped, recorded as an issue
- Per field: header / summary miss → sentinel or zero default

Each parse keeps its state in a private run object, so one extractor can be
used for many documents (and from many threads) without cross-talk.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import List, Optional, Sequence, Union

from bpreader.config import DEFAULT_CONFIG, EngineConfig
from bpreader.extraction.columns import split_into_columns
from bpreader.extraction.header import extract_report_metadata, missing_fields
from bpreader.extraction.model import (
    ExtractionIssue,
    ParseFailure,
    ParseFailureReason,
    ParseState,
    Reading,
    Report,
    ReportMetadata,
)
from bpreader.extraction.pages import PageTextProvider, StaticPageProvider
from bpreader.extraction.rows import extract_readings
from bpreader.extraction.summary import extract_summary_stats

logger = logging.getLogger(__name__)

ParseResult = Union[Report, ParseFailure]


class CancellationToken:
    """
    Checked by the assembler before each page.

    Cancel explicitly from any thread with cancel(), or give a timeout in
    seconds after which the token reports cancelled on its own.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline


def extract_page_readings(
    page_text: str,
    config: EngineConfig = DEFAULT_CONFIG,
    issues: Optional[List[ExtractionIssue]] = None,
    page_index: Optional[int] = None,
) -> List[Reading]:
    """
    Readings from one page: column split, then rows per stream.

    If the split streams yield nothing, the unsplit page is scanned as a
    single stream so a bad column guess never loses a page.
    """
    streams = split_into_columns(page_text)
    readings: List[Reading] = []
    split_issues: List[ExtractionIssue] = []
    for stream in streams:
        readings.extend(extract_readings(stream, config, split_issues, page_index))

    if not readings and len(streams) > 1:
        logger.debug("Column split found no rows on page %s; retrying as one stream", page_index)
        # Rescan replaces the split pass, issues included
        split_issues = []
        readings = extract_readings(page_text, config, split_issues, page_index)

    if issues is not None:
        issues.extend(split_issues)
    return readings


class _ParseRun:
    """Mutable state of a single parse. Never shared between parses."""

    def __init__(self, document, provider: PageTextProvider, config: EngineConfig):
        self.document = document
        self.provider = provider
        self.config = config
        self.state = ParseState.START
        self.metadata: Optional[ReportMetadata] = None
        self.readings: List[Reading] = []
        self.issues: List[ExtractionIssue] = []
        self.page_count = 0

    def transition(self, state: ParseState) -> None:
        logger.debug("Parse state %s -> %s", self.state.value, state.value)
        self.state = state

    def fail(self, reason: ParseFailureReason, message: str) -> ParseFailure:
        logger.error(message)
        self.transition(ParseState.FAILED)
        partial = tuple(self.readings) if reason is ParseFailureReason.CANCELLED else ()
        return ParseFailure(reason=reason, message=message, partial_readings=partial)

    def _page_count(self) -> Optional[int]:
        try:
            return self.provider.page_count(self.document)
        except Exception as e:
            logger.error("Page count unavailable: %s", e)
            return None

    def _page_text(self, index: int) -> Optional[str]:
        try:
            return self.provider.page_text(self.document, index)
        except Exception as e:
            logger.warning("Could not access page at index %d: %s", index, e)
            return None

    def parse_header(self) -> Optional[ParseFailure]:
        count = self._page_count()
        if count is None:
            return self.fail(ParseFailureReason.DOCUMENT_UNREADABLE, "Failed to open document")
        self.page_count = count
        logger.info("Starting to parse document with %d pages", count)

        first = self._page_text(0) if count > 0 else None
        if first is None or not first.strip():
            return self.fail(ParseFailureReason.NO_HEADER_PAGE, "Failed to extract text from first page")

        summary = extract_summary_stats(first, self.config)
        if summary is None:
            self.issues.append(ExtractionIssue(
                stage="summary", category="missing",
                description="Summary table not found on first page", page_index=0,
            ))
        self.metadata = extract_report_metadata(first, self.config, summary)
        for name in missing_fields(self.metadata, self.config):
            self.issues.append(ExtractionIssue(
                stage="header", category="defaulted",
                description=f"Header field '{name}' not found", page_index=0,
            ))
        self.transition(ParseState.HEADER_PARSED)
        return None

    def accumulate_pages(self, token: Optional[CancellationToken]) -> Optional[ParseFailure]:
        self.transition(ParseState.PER_PAGE_ACCUMULATING)
        for index in range(self.config.first_reading_page, self.page_count):
            if token is not None and token.cancelled:
                return self.fail(
                    ParseFailureReason.CANCELLED,
                    f"Parse cancelled before page {index + 1} of {self.page_count}",
                )

            text = self._page_text(index)
            if text is None:
                logger.warning("Page %d has no text content", index + 1)
                self.issues.append(ExtractionIssue(
                    stage="page", category="unreadable",
                    description="Page text unavailable", page_index=index,
                ))
                continue

            page_readings = extract_page_readings(text, self.config, self.issues, index)
            logger.info("Extracted %d readings from page %d", len(page_readings), index + 1)
            if not page_readings:
                self.issues.append(ExtractionIssue(
                    stage="page", category="missing",
                    description="No readings found on page", page_index=index,
                ))
            self.readings.extend(page_readings)
        return None

    def assemble(self) -> Report:
        untimed = sum(1 for r in self.readings if r.instant is None)
        if untimed:
            logger.warning("%d readings have a time that cannot be combined with their date", untimed)
            self.issues.append(ExtractionIssue(
                stage="time", category="unsortable",
                description=f"{untimed} readings excluded from chronological views",
            ))
        self.transition(ParseState.ASSEMBLED)
        logger.info("Successfully parsed report with %d total readings", len(self.readings))
        return Report(
            metadata=self.metadata,
            readings=tuple(self.readings),
            page_count=self.page_count,
            issues=tuple(self.issues),
        )


class ReportExtractor:
    """
    Report extraction engine.

    Holds only a page text provider and a config; every call to parse()
    is independent.
    """

    def __init__(self, provider: Optional[PageTextProvider] = None, config: EngineConfig = DEFAULT_CONFIG):
        self.provider = provider or StaticPageProvider()
        self.config = config

    def parse(self, document, token: Optional[CancellationToken] = None) -> ParseResult:
        run = _ParseRun(document, self.provider, self.config)
        try:
            failure = run.parse_header()
            if failure is not None:
                return failure

            failure = run.accumulate_pages(token)
            if failure is not None:
                return failure

            return run.assemble()
        finally:
            self.provider.release(document)


def parse_pages(
    pages: Sequence[Optional[str]],
    config: EngineConfig = DEFAULT_CONFIG,
    token: Optional[CancellationToken] = None,
) -> ParseResult:
    """Parse pre-extracted page texts (None for unreadable pages)."""
    return ReportExtractor(StaticPageProvider(), config).parse(pages, token)
