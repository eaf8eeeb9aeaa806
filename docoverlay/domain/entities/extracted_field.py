"""
ExtractedField Entity - the flattened, addressable unit of an analysis result.

Words, lines, table cells, key-value sides and semantic document fields are
all decomposed into this one shape so the overlay and the results list can
share a single identifier space.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..value_objects.confidence import Confidence
from ..value_objects.field_kind import FieldKind
from ..value_objects.geometry import Polygon


@dataclass(frozen=True)
class ExtractedField:
    """
    Immutable extracted field.

    Attributes:
        id: Stable identifier derived from the field's source position
            (e.g. ``table-2-cell-5``)
        kind: Source artifact kind
        label: Human readable label
        value: Display value
        confidence: Confidence in [0, 1]
        page_number: 1-based page the field belongs to
        polygon: Region in document units, when the engine reported one
        metadata: Kind-specific details (row/col, field name, key/value role)
    """
    id: str
    kind: FieldKind
    label: str
    value: str
    confidence: Confidence
    page_number: int = 1
    polygon: Optional[Polygon] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.id:
            raise ValueError("ExtractedField requires an id")
        if not isinstance(self.confidence, Confidence):
            object.__setattr__(self, "confidence", Confidence.from_raw(self.confidence))
        if self.page_number < 1:
            object.__setattr__(self, "page_number", 1)

    def has_geometry(self) -> bool:
        return self.polygon is not None

    def matches_text(self, needle: str) -> bool:
        """Case-insensitive search over label and value."""
        needle = needle.lower()
        return needle in self.label.lower() or needle in self.value.lower()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "value": self.value,
            "confidence": self.confidence.value,
            "page_number": self.page_number,
            "polygon": self.polygon.to_list() if self.polygon else None,
            "metadata": dict(self.metadata),
        }

    def __hash__(self) -> int:
        return hash(self.id)
