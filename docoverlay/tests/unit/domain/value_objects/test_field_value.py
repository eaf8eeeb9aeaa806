"""
Unit tests for typed document field values and field kinds
"""
from datetime import date

import pytest

from docoverlay.domain.value_objects.field_kind import DEFAULT_VISIBLE_KINDS, FieldKind
from docoverlay.domain.value_objects.field_value import (
    AmountValue,
    DateValue,
    ListValue,
    StringValue,
    parse_field_value,
)


class TestParseFieldValue:
    def test_date(self):
        value = parse_field_value({"type": "date", "valueDate": "2024-01-15", "content": "Jan 15"})
        assert value == DateValue(value=date(2024, 1, 15), text="Jan 15")
        assert value.display() == "Jan 15"

    def test_unparseable_date_falls_back_to_content(self):
        value = parse_field_value({"type": "date", "valueDate": "someday", "content": "someday"})
        assert value == StringValue("someday")

    def test_currency(self):
        value = parse_field_value(
            {"type": "currency", "valueCurrency": {"amount": 1234.5, "currencyCode": "USD"}}
        )
        assert isinstance(value, AmountValue)
        assert value.amount == 1234.5
        assert value.display() == "1,234.50 USD"

    def test_currency_symbol_prefix(self):
        value = AmountValue(amount=10, currency_code="USD", currency_symbol="$")
        assert value.display() == "$10.00"

    def test_array(self):
        value = parse_field_value(
            {
                "type": "array",
                "valueArray": [
                    {"type": "string", "valueString": "a", "content": "a"},
                    {"type": "number", "valueNumber": 2, "content": "2"},
                ],
            }
        )
        assert isinstance(value, ListValue)
        assert value.display() == "a, 2"

    @pytest.mark.parametrize(
        "raw",
        [
            {"type": "currency", "valueCurrency": "12", "content": "$12"},
            {"type": "currency", "valueCurrency": ["12"], "content": "$12"},
            {"type": "currency", "valueCurrency": {"amount": "n/a"}, "content": "$12"},
        ],
    )
    def test_malformed_currency_falls_back_to_content(self, raw):
        assert parse_field_value(raw) == StringValue("$12")

    def test_array_that_is_not_a_list(self):
        value = parse_field_value({"type": "array", "valueArray": "a,b", "content": "a,b"})
        assert value == ListValue(items=(), text="a,b")

    def test_non_mapping_payload(self):
        assert parse_field_value("12") == StringValue("")

    def test_unknown_type_uses_content(self):
        assert parse_field_value({"type": "signature", "content": "J. Doe"}) == StringValue("J. Doe")

    def test_empty(self):
        assert parse_field_value(None).display() == ""


class TestFieldKind:
    def test_display_name(self):
        assert FieldKind.TABLE_CELL.display_name == "Table"
        assert FieldKind.KEY_VALUE_PAIR.display_name == "Key-Value"

    def test_parse_many(self):
        assert FieldKind.parse_many(["word", " Table ", ""]) == frozenset(
            {FieldKind.WORD, FieldKind.TABLE_CELL}
        )

    def test_parse_many_none(self):
        assert FieldKind.parse_many(None) is None

    def test_parse_many_rejects_unknown(self):
        with pytest.raises(ValueError):
            FieldKind.parse_many(["paragraph"])

    def test_lines_hidden_by_default(self):
        assert FieldKind.LINE not in DEFAULT_VISIBLE_KINDS
        assert FieldKind.WORD in DEFAULT_VISIBLE_KINDS
