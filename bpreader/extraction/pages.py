#!/usr/bin/env python3
"""
Page text providers.

The engine never reads PDF bytes. It asks a provider for a page count and
for each page's text; either call may come back None (unavailable).

- StaticPageProvider: document handle is a sequence of page strings
- PdfPageProvider: document handle is a path, text comes from pypdf
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple, Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError

logger = logging.getLogger(__name__)


def clean_page_text(text: str) -> str:
    """Normalize NBSP and line endings; keep column spacing intact."""
    text = (text or "").replace("\u00a0", " ")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text


class PageTextProvider:
    """Base provider. Subclasses return None for anything unavailable."""

    def page_count(self, document) -> Optional[int]:
        raise NotImplementedError

    def page_text(self, document, index: int) -> Optional[str]:
        raise NotImplementedError

    def release(self, document) -> None:
        """Called once a parse of ``document`` ends; drop anything held for it."""


class StaticPageProvider(PageTextProvider):
    """Pages already extracted to strings; None entries are unreadable pages."""

    def page_count(self, document: Sequence[Optional[str]]) -> Optional[int]:
        if document is None:
            return None
        return len(document)

    def page_text(self, document: Sequence[Optional[str]], index: int) -> Optional[str]:
        if document is None or not 0 <= index < len(document):
            return None
        text = document[index]
        if text is None:
            return None
        return clean_page_text(text)


class PdfPageProvider(PageTextProvider):
    """
    pypdf-backed provider. One PdfReader per document path, opened lazily
    and held only while that document is being parsed.

    A cached reader is re-opened if the file's size or mtime changed since
    it was opened; release() drops it once the engine is done.
    """

    def __init__(self, strict: bool = False):
        self._strict = strict
        self._readers: Dict[str, Tuple[Tuple[int, int], PdfReader]] = {}

    def _reader(self, document: Union[str, Path]) -> Optional[PdfReader]:
        key = str(document)
        try:
            st = os.stat(key)
        except OSError as e:
            logger.error("Failed to open PDF document %s: %s", key, e)
            self._readers.pop(key, None)
            return None
        signature = (st.st_mtime_ns, st.st_size)

        cached = self._readers.get(key)
        if cached is not None and cached[0] == signature:
            return cached[1]
        try:
            reader = PdfReader(key, strict=self._strict)
        except (OSError, PdfReadError) as e:
            logger.error("Failed to open PDF document %s: %s", key, e)
            self._readers.pop(key, None)
            return None
        self._readers[key] = (signature, reader)
        return reader

    def page_count(self, document: Union[str, Path]) -> Optional[int]:
        reader = self._reader(document)
        if reader is None:
            return None
        return len(reader.pages)

    def page_text(self, document: Union[str, Path], index: int) -> Optional[str]:
        reader = self._reader(document)
        if reader is None or not 0 <= index < len(reader.pages):
            return None
        try:
            raw = reader.pages[index].extract_text()
        except (PdfReadError, ValueError, KeyError) as e:
            logger.warning("Text extraction failed on page %d of %s: %s", index, document, e)
            return None
        if not raw:
            return None
        # Collapse runs of blank lines
        return re.sub(r"\n{3,}", "\n\n", clean_page_text(raw))

    def release(self, document: Union[str, Path]) -> None:
        self._readers.pop(str(document), None)

    def close(self) -> None:
        self._readers.clear()
