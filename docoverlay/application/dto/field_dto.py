"""DTOs for extracted fields, overlays and selection."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.services.overlay_projector import BoundingBox
from docoverlay.domain.value_objects.selection_state import SelectionState


@dataclass(frozen=True)
class ExtractedFieldsDTO:
    """Filtered results list plus the tab counts of the unfiltered list."""

    document_id: str
    fields: List[ExtractedField] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class PageOverlayDTO:
    document_id: str
    page_number: int
    canvas_width: float
    canvas_height: float
    scale: float
    boxes: List[BoundingBox] = field(default_factory=list)
    selection: SelectionState = field(default_factory=SelectionState)


@dataclass(frozen=True)
class SelectionDTO:
    document_id: str
    selected_id: Optional[str] = None
    highlighted_id: Optional[str] = None

    @classmethod
    def from_state(cls, document_id: str, state: SelectionState) -> SelectionDTO:
        return cls(
            document_id=document_id,
            selected_id=state.selected_id,
            highlighted_id=state.highlighted_id,
        )
