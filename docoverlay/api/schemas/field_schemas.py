"""
Schemas for extracted fields, page overlays and selection
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from docoverlay.application.dto.field_dto import ExtractedFieldsDTO, PageOverlayDTO
from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.services.overlay_projector import BoundingBox

from .common_schemas import BoundingBoxSchema, PointSchema, SelectionSchema


class ExtractedFieldSchema(BaseModel):
    id: str
    kind: str
    kindLabel: str
    label: str
    value: str
    confidence: float
    confidenceLevel: str
    pageNumber: int
    polygon: Optional[List[float]] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ExtractedFieldsResponseSchema(BaseModel):
    documentId: str
    fields: List[ExtractedFieldSchema] = Field(default_factory=list)
    total: int = 0
    counts: Dict[str, int] = Field(default_factory=dict)


class OverlayBoxSchema(BaseModel):
    id: str
    kind: str
    label: str
    value: str
    confidence: float
    pageNumber: int
    bbox: BoundingBoxSchema
    isSelected: bool = False
    isHighlighted: bool = False
    color: str
    opacity: float


class PageOverlaySchema(BaseModel):
    documentId: str
    pageNumber: int
    canvasWidth: float
    canvasHeight: float
    scale: float
    boxes: List[OverlayBoxSchema] = Field(default_factory=list)
    selection: SelectionSchema


class SelectionRequestSchema(BaseModel):
    action: Literal["select", "hover", "clear"]
    fieldId: Optional[str] = None


def field_to_schema(extracted: ExtractedField) -> ExtractedFieldSchema:
    return ExtractedFieldSchema(
        id=extracted.id,
        kind=extracted.kind.value,
        kindLabel=extracted.kind.display_name,
        label=extracted.label,
        value=extracted.value,
        confidence=extracted.confidence.value,
        confidenceLevel=extracted.confidence.level(),
        pageNumber=extracted.page_number,
        polygon=extracted.polygon.to_list() if extracted.polygon else None,
        metadata=dict(extracted.metadata),
    )


def fields_to_schema(dto: ExtractedFieldsDTO) -> ExtractedFieldsResponseSchema:
    return ExtractedFieldsResponseSchema(
        documentId=dto.document_id,
        fields=[field_to_schema(extracted) for extracted in dto.fields],
        total=dto.total,
        counts=dict(dto.counts),
    )


def box_to_schema(box: BoundingBox) -> OverlayBoxSchema:
    rect = box.rect
    return OverlayBoxSchema(
        id=box.id,
        kind=box.kind.value,
        label=box.label,
        value=box.value,
        confidence=box.confidence,
        pageNumber=box.page_number,
        bbox=BoundingBoxSchema(
            x=rect.x,
            y=rect.y,
            width=rect.width,
            height=rect.height,
            points=[PointSchema(x=point.x, y=point.y) for point in rect.points],
        ),
        isSelected=box.is_selected,
        isHighlighted=box.is_highlighted,
        color=box.color,
        opacity=box.opacity,
    )


def overlay_to_schema(dto: PageOverlayDTO) -> PageOverlaySchema:
    return PageOverlaySchema(
        documentId=dto.document_id,
        pageNumber=dto.page_number,
        canvasWidth=dto.canvas_width,
        canvasHeight=dto.canvas_height,
        scale=dto.scale,
        boxes=[box_to_schema(box) for box in dto.boxes],
        selection=SelectionSchema(
            documentId=dto.document_id,
            selectedId=dto.selection.selected_id,
            highlightedId=dto.selection.highlighted_id,
        ),
    )
