"""
SpanLocator domain service.

Resolves the page a text span belongs to when an entity carries no explicit
page. The engine's true page-to-offset layout is not part of the result, so
the page boundaries are approximated by summing the text of each page's
lines (or words when a page has no lines), counting one separator character
per element. Mismatches for long documents are expected.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from docoverlay.domain.entities.analysis_result import AnalysisPage, Span

DEFAULT_PAGE = 1
SEPARATOR_LENGTH = 1


def page_text_length(page: AnalysisPage) -> int:
    """Approximate number of characters ``page`` contributes to the content."""
    if page.lines:
        return sum(len(line.content) + SEPARATOR_LENGTH for line in page.lines)
    if page.words:
        return sum(len(word.content) + SEPARATOR_LENGTH for word in page.words)
    return 0


def page_for_offset(offset: int, pages: Iterable[AnalysisPage]) -> Optional[int]:
    """Return the page whose approximate character range contains ``offset``."""
    start = 0
    for page in pages:
        length = page_text_length(page)
        if start <= offset < start + length:
            return page.page_number
        start += length
    return None


def page_for_span(spans: Optional[Sequence[Span]], pages: Iterable[AnalysisPage]) -> int:
    """
    Resolve the page of the first span in ``spans``.

    Args:
        spans: Spans of the entity; only the first one is used
        pages: Pages in document order

    Returns:
        The containing page number, or 1 when ``spans`` is empty or no page's
        approximate range contains the offset

    Examples:
        >>> page_for_span([], pages)
        1
    """
    if not spans:
        return DEFAULT_PAGE
    page_number = page_for_offset(spans[0].offset, pages)
    return page_number if page_number is not None else DEFAULT_PAGE
