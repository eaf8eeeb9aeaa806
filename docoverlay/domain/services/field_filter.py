"""Results-list filtering over extracted fields."""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Optional

from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.value_objects.field_kind import FieldKind


@dataclass(frozen=True)
class FilterOptions:
    """
    Criteria for the results list.

    ``kinds=None`` keeps every kind; an empty set keeps nothing.
    """
    kinds: Optional[AbstractSet[FieldKind]] = None
    min_confidence: float = 0.0
    max_confidence: float = 1.0
    search: str = ""
    page_number: Optional[int] = None

    def __post_init__(self):
        if self.min_confidence > self.max_confidence:
            raise ValueError("min_confidence must not exceed max_confidence")


class FieldFilter:
    """Applies :class:`FilterOptions` to a field list, keeping its order."""

    def apply(self, fields: Iterable[ExtractedField], options: FilterOptions) -> List[ExtractedField]:
        needle = options.search.strip().lower()
        return [
            extracted
            for extracted in fields
            if (options.kinds is None or extracted.kind in options.kinds)
            and extracted.confidence.within(options.min_confidence, options.max_confidence)
            and (not needle or extracted.matches_text(needle))
            and (options.page_number is None or extracted.page_number == options.page_number)
        ]

    @staticmethod
    def count_by_kind(fields: Iterable[ExtractedField]) -> Dict[str, int]:
        """Tab counts: one entry per kind plus ``all``."""
        counts = {kind.value: 0 for kind in FieldKind}
        total = 0
        for extracted in fields:
            counts[extracted.kind.value] += 1
            total += 1
        counts["all"] = total
        return counts
