"""Tests for the span-to-page heuristic."""
from __future__ import annotations

from docoverlay.domain.entities.analysis_result import AnalysisPage, Line, Span, Word
from docoverlay.domain.services.span_locator import page_for_offset, page_for_span, page_text_length


def _page(number: int, lines=None, words=()) -> AnalysisPage:
    return AnalysisPage(page_number=number, width=8.5, height=11, words=tuple(words), lines=lines)


def _line(text: str) -> Line:
    return Line(content=text, polygon=())


def _word(text: str) -> Word:
    return Word(content=text, polygon=(), confidence=0.9)


PAGES = [
    _page(1, lines=(_line("Hello"), _line("World"))),  # 12 characters: [0, 12)
    _page(2, lines=(_line("Second page"),)),  # 12 characters: [12, 24)
]


def test_empty_spans_resolve_to_first_page():
    assert page_for_span([], PAGES) == 1
    assert page_for_span(None, PAGES) == 1


def test_offset_on_second_page():
    assert page_for_span([Span(offset=15, length=3)], PAGES) == 2


def test_only_first_span_counts():
    spans = [Span(offset=2, length=1), Span(offset=20, length=1)]
    assert page_for_span(spans, PAGES) == 1


def test_page_boundary():
    assert page_for_offset(11, PAGES) == 1
    assert page_for_offset(12, PAGES) == 2


def test_offset_past_the_end_defaults_to_one():
    assert page_for_offset(500, PAGES) is None
    assert page_for_span([Span(offset=500, length=1)], PAGES) == 1


def test_words_used_when_lines_missing_or_empty():
    assert page_text_length(_page(1, lines=None, words=[_word("abc"), _word("de")])) == 7
    assert page_text_length(_page(1, lines=(), words=[_word("abc")])) == 4


def test_blank_page_has_no_length():
    assert page_text_length(_page(1)) == 0
