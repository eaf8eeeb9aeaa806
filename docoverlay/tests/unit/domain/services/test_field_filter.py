"""
Unit tests for FieldFilter and FilterOptions.
"""
import pytest

from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.services.field_filter import FieldFilter, FilterOptions
from docoverlay.domain.value_objects.field_kind import FieldKind

FIELDS = [
    ExtractedField(id="word-0", kind=FieldKind.WORD, label="Word", value="Invoice", confidence=0.99, page_number=1),
    ExtractedField(id="word-1", kind=FieldKind.WORD, label="Word", value="ACME", confidence=0.4, page_number=2),
    ExtractedField(id="kvp-value-0", kind=FieldKind.KEY_VALUE_PAIR, label="Total", value="$10", confidence=0.8),
    ExtractedField(id="table-0-cell-0", kind=FieldKind.TABLE_CELL, label="Table 1 Cell", value="Item", confidence=1.0),
]


def _ids(fields):
    return [extracted.id for extracted in fields]


def test_no_options_keeps_everything_in_order():
    assert _ids(FieldFilter().apply(FIELDS, FilterOptions())) == _ids(FIELDS)


def test_kinds():
    options = FilterOptions(kinds={FieldKind.WORD})
    assert _ids(FieldFilter().apply(FIELDS, options)) == ["word-0", "word-1"]


def test_empty_kinds_keeps_nothing():
    assert FieldFilter().apply(FIELDS, FilterOptions(kinds=frozenset())) == []


def test_confidence_range_is_inclusive():
    options = FilterOptions(min_confidence=0.8, max_confidence=0.99)
    assert _ids(FieldFilter().apply(FIELDS, options)) == ["word-0", "kvp-value-0"]


def test_search_matches_label_or_value_case_insensitively():
    assert _ids(FieldFilter().apply(FIELDS, FilterOptions(search="acme"))) == ["word-1"]
    assert _ids(FieldFilter().apply(FIELDS, FilterOptions(search=" TOTAL "))) == ["kvp-value-0"]


def test_page():
    assert _ids(FieldFilter().apply(FIELDS, FilterOptions(page_number=2))) == ["word-1"]


def test_inverted_range_rejected():
    with pytest.raises(ValueError):
        FilterOptions(min_confidence=0.9, max_confidence=0.1)


def test_count_by_kind():
    counts = FieldFilter.count_by_kind(FIELDS)
    assert counts["word"] == 2
    assert counts["key_value_pair"] == 1
    assert counts["line"] == 0
    assert counts["all"] == 4
