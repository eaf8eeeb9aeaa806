"""
Typed values of semantic document fields.

The analysis engine reports each document field as a loosely shaped mapping
(``{"type": "currency", "valueCurrency": {...}, "content": "$10"}``). These
variants give the decomposer a small closed set of shapes to work with;
anything unrecognized degrades to :class:`StringValue` built from the raw
``content``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StringValue:
    text: str
    kind: str = "string"

    def display(self) -> str:
        return self.text


@dataclass(frozen=True)
class DateValue:
    value: date
    text: str = ""
    kind: str = "date"

    def display(self) -> str:
        return self.text or self.value.isoformat()


@dataclass(frozen=True)
class AmountValue:
    amount: float
    currency_code: Optional[str] = None
    currency_symbol: Optional[str] = None
    text: str = ""
    kind: str = "amount"

    def display(self) -> str:
        if self.text:
            return self.text
        prefix = self.currency_symbol or ""
        suffix = f" {self.currency_code}" if self.currency_code and not prefix else ""
        return f"{prefix}{self.amount:,.2f}{suffix}"


@dataclass(frozen=True)
class ListValue:
    items: Tuple["FieldValue", ...]
    text: str = ""
    kind: str = "list"

    def display(self) -> str:
        if self.text:
            return self.text
        return ", ".join(item.display() for item in self.items)


FieldValue = Union[StringValue, DateValue, AmountValue, ListValue]


def parse_field_value(raw: Optional[Mapping[str, Any]]) -> FieldValue:
    """
    Convert an engine field mapping into a :data:`FieldValue`.

    Args:
        raw: Field payload with ``type`` and a ``value*`` entry

    Returns:
        The matching variant, or :class:`StringValue` of ``content`` when the
        shape is unknown or its typed value is unusable

    Examples:
        >>> parse_field_value({"type": "date", "valueDate": "2024-01-15", "content": "Jan 15"})
        DateValue(value=datetime.date(2024, 1, 15), text='Jan 15', kind='date')
    """
    if not isinstance(raw, Mapping) or not raw:
        return StringValue("")

    content = str(raw.get("content") or "")
    value_type = str(raw.get("type") or "").lower()

    if value_type == "date":
        parsed = _parse_date(raw.get("valueDate"))
        if parsed is not None:
            return DateValue(value=parsed, text=content)

    elif value_type == "currency":
        currency = raw.get("valueCurrency")
        amount = _parse_number(currency.get("amount")) if isinstance(currency, Mapping) else None
        if amount is not None:
            return AmountValue(
                amount=amount,
                currency_code=currency.get("currencyCode"),
                currency_symbol=currency.get("currencySymbol"),
                text=content,
            )

    elif value_type in ("number", "integer"):
        amount = _parse_number(raw.get("valueNumber", raw.get("valueInteger")))
        if amount is not None:
            return AmountValue(amount=amount, text=content)

    elif value_type == "array":
        items = tuple(
            parse_field_value(item)
            for item in _as_list(raw.get("valueArray"))
            if isinstance(item, Mapping)
        )
        return ListValue(items=items, text=content)

    elif value_type == "string" and raw.get("valueString") is not None:
        return StringValue(content or str(raw["valueString"]))

    return StringValue(content)


def _parse_date(raw: Any) -> Optional[date]:
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        logger.debug("Unparseable date value %r", raw)
        return None


def _parse_number(raw: Any) -> Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


def _as_list(raw: Any) -> Tuple[Any, ...]:
    if isinstance(raw, (list, tuple)):
        return tuple(raw)
    return ()
