"""Kinds of extracted fields."""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, Optional


class FieldKind(str, Enum):
    """Source artifact an extracted field was flattened from."""
    WORD = "word"
    LINE = "line"
    TABLE_CELL = "table_cell"
    KEY_VALUE_PAIR = "key_value_pair"
    DOCUMENT_FIELD = "document_field"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse_many(cls, raw: Optional[Iterable[str]]) -> Optional[FrozenSet[FieldKind]]:
        """
        Parse kind names (``"word"``, ``"table_cell"`` ...) into a set.

        ``"table"`` is accepted as an alias of ``table_cell``. Returns ``None``
        when ``raw`` is ``None`` so callers can fall back to their defaults.

        Raises:
            ValueError: If a name is not a known kind
        """
        if raw is None:
            return None
        kinds = set()
        for name in raw:
            name = (name or "").strip().lower()
            if not name:
                continue
            if name == "table":
                name = cls.TABLE_CELL.value
            kinds.add(cls(name))
        return frozenset(kinds)


_DISPLAY_NAMES = {
    FieldKind.WORD: "Word",
    FieldKind.LINE: "Line",
    FieldKind.TABLE_CELL: "Table",
    FieldKind.KEY_VALUE_PAIR: "Key-Value",
    FieldKind.DOCUMENT_FIELD: "Field",
}

ALL_KINDS: FrozenSet[FieldKind] = frozenset(FieldKind)

# Lines duplicate their words on the canvas, so they start hidden.
DEFAULT_VISIBLE_KINDS: FrozenSet[FieldKind] = frozenset(
    {
        FieldKind.WORD,
        FieldKind.TABLE_CELL,
        FieldKind.KEY_VALUE_PAIR,
        FieldKind.DOCUMENT_FIELD,
    }
)
