"""
OverlayProjector domain service.

Turns the extracted fields of one page into renderable bounding boxes for a
given canvas size and zoom. Boxes are recomputed from scratch on every call;
nothing from a previous projection is reused.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Any, Dict, Iterable, List, Optional, Sequence

from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.exceptions import InvalidGeometry
from docoverlay.domain.services.geometry_mapper import point_in_rect, polygon_to_canvas
from docoverlay.domain.value_objects.confidence import Confidence
from docoverlay.domain.value_objects.field_kind import DEFAULT_VISIBLE_KINDS, FieldKind
from docoverlay.domain.value_objects.geometry import CanvasRect, PageSize, Point

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#6b7280"

_KIND_COLORS = {
    FieldKind.WORD: "#3b82f6",
    FieldKind.LINE: "#10b981",
    FieldKind.TABLE_CELL: "#f59e0b",
    FieldKind.KEY_VALUE_PAIR: "#8b5cf6",
    FieldKind.DOCUMENT_FIELD: "#ef4444",
}


@dataclass(frozen=True)
class BoundingBox:
    """Pixel-space projection of one extracted field. Never persisted."""
    id: str
    kind: FieldKind
    label: str
    value: str
    confidence: float
    page_number: int
    rect: CanvasRect
    is_selected: bool = False
    is_highlighted: bool = False
    color: str = DEFAULT_COLOR
    opacity: float = 0.2

    def contains(self, point: Point) -> bool:
        return point_in_rect(point, self.rect)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "label": self.label,
            "value": self.value,
            "confidence": self.confidence,
            "page_number": self.page_number,
            **self.rect.to_dict(),
            "is_selected": self.is_selected,
            "is_highlighted": self.is_highlighted,
            "color": self.color,
            "opacity": self.opacity,
        }


def color_for_kind(kind: Optional[FieldKind]) -> str:
    return _KIND_COLORS.get(kind, DEFAULT_COLOR)


def opacity_for_confidence(confidence: float) -> float:
    return Confidence.from_raw(confidence, default=0.0).overlay_opacity()


class OverlayProjector:
    """
    Domain service projecting extracted fields onto a canvas.

    Holds no state between calls; the same instance may project different
    pages or zoom levels concurrently.
    """

    color_for_kind = staticmethod(color_for_kind)
    opacity_for_confidence = staticmethod(opacity_for_confidence)

    def project(
        self,
        fields: Iterable[ExtractedField],
        *,
        page: PageSize,
        canvas_width: float,
        canvas_height: float,
        scale: float = 1.0,
        visible_kinds: Optional[AbstractSet[FieldKind]] = None,
        selected_id: Optional[str] = None,
        highlighted_id: Optional[str] = None,
    ) -> List[BoundingBox]:
        """
        Project the visible fields of ``page``.

        Fields on other pages, of hidden kinds or without geometry are
        dropped before any geometry is computed. A selection suppresses every
        highlight, including one on a different box.

        Args:
            fields: Extracted fields in decomposition order
            page: Page dimensions in document units
            canvas_width, canvas_height: Render surface size in pixels
            scale: Zoom factor
            visible_kinds: Kinds to draw; defaults to every kind except lines
            selected_id: Currently selected field id
            highlighted_id: Currently hovered field id

        Returns:
            Boxes in projection order (the last one is drawn on top)
        """
        kinds = DEFAULT_VISIBLE_KINDS if visible_kinds is None else visible_kinds
        if selected_id is not None:
            highlighted_id = None

        boxes: List[BoundingBox] = []
        for extracted in fields:
            if extracted.page_number != page.page_number or extracted.kind not in kinds:
                continue
            if extracted.polygon is None:
                continue

            try:
                rect = polygon_to_canvas(
                    extracted.polygon,
                    page.width,
                    page.height,
                    canvas_width,
                    canvas_height,
                    scale,
                )
            except InvalidGeometry as exc:
                logger.warning(
                    "Skipping overlay box for field %s: %s",
                    extracted.id,
                    exc.message,
                    extra={"field_id": extracted.id},
                )
                continue

            confidence = extracted.confidence.value
            boxes.append(
                BoundingBox(
                    id=extracted.id,
                    kind=extracted.kind,
                    label=extracted.label,
                    value=extracted.value,
                    confidence=confidence,
                    page_number=extracted.page_number,
                    rect=rect,
                    is_selected=extracted.id == selected_id,
                    is_highlighted=extracted.id == highlighted_id,
                    color=color_for_kind(extracted.kind),
                    opacity=opacity_for_confidence(confidence),
                )
            )

        return boxes

    @staticmethod
    def box_at(boxes: Sequence[BoundingBox], point: Point) -> Optional[BoundingBox]:
        """Topmost box containing ``point``; later boxes win on overlap."""
        for box in reversed(boxes):
            if box.contains(point):
                return box
        return None
