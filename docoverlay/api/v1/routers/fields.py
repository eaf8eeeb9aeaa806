"""Extracted field, page overlay and page image routes for v1 endpoints."""
from __future__ import annotations

from typing import FrozenSet, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from docoverlay.api.schemas import (
    ExtractedFieldsResponseSchema,
    PageOverlaySchema,
    fields_to_schema,
    overlay_to_schema,
)
from docoverlay.api.v1.dependencies import (
    get_list_extracted_fields_handler,
    get_page_image_handler,
    get_page_overlay_handler,
)
from docoverlay.api.v1.errors import to_http_exception
from docoverlay.application.queries.get_page_image import GetPageImageHandler, GetPageImageQuery
from docoverlay.application.queries.get_page_overlay import (
    GetPageOverlayHandler,
    GetPageOverlayQuery,
    PageNotFound,
)
from docoverlay.application.queries.list_extracted_fields import (
    ListExtractedFieldsHandler,
    ListExtractedFieldsQuery,
)
from docoverlay.constants import MAX_RENDER_SCALE, MIN_RENDER_SCALE
from docoverlay.domain.exceptions import ServiceError
from docoverlay.domain.value_objects.field_kind import FieldKind

router = APIRouter(prefix="/documents", tags=["fields"])


def _parse_kinds(raw: Optional[str]) -> Optional[FrozenSet[FieldKind]]:
    if raw is None:
        return None
    try:
        return FieldKind.parse_many(raw.split(","))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Unknown field kind in '{raw}'") from exc


@router.get("/{document_id}/fields", response_model=ExtractedFieldsResponseSchema)
def list_fields(
    document_id: str,
    kinds: Optional[str] = Query(default=None),
    min_confidence: float = Query(default=0.0, ge=0.0, le=1.0, alias="minConfidence"),
    max_confidence: float = Query(default=1.0, ge=0.0, le=1.0, alias="maxConfidence"),
    search: str = Query(default=""),
    page: Optional[int] = Query(default=None, ge=1),
    handler: ListExtractedFieldsHandler = Depends(get_list_extracted_fields_handler),
) -> ExtractedFieldsResponseSchema:
    query = ListExtractedFieldsQuery(
        document_id=document_id,
        kinds=_parse_kinds(kinds),
        min_confidence=min_confidence,
        max_confidence=max_confidence,
        search=search,
        page_number=page,
    )
    try:
        dto = handler.handle(query)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return fields_to_schema(dto)


@router.get("/{document_id}/pages/{page_number}/overlay", response_model=PageOverlaySchema)
def get_page_overlay(
    document_id: str,
    page_number: int,
    scale: float = Query(default=1.0, ge=MIN_RENDER_SCALE, le=MAX_RENDER_SCALE),
    canvas_width: Optional[float] = Query(default=None, gt=0, alias="canvasWidth"),
    canvas_height: Optional[float] = Query(default=None, gt=0, alias="canvasHeight"),
    kinds: Optional[str] = Query(default=None),
    handler: GetPageOverlayHandler = Depends(get_page_overlay_handler),
) -> PageOverlaySchema:
    query = GetPageOverlayQuery(
        document_id=document_id,
        page_number=page_number,
        scale=scale,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        kinds=_parse_kinds(kinds),
    )
    try:
        dto = handler.handle(query)
    except PageNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return overlay_to_schema(dto)


@router.get("/{document_id}/pages/{page_number}/image")
def get_page_image(
    document_id: str,
    page_number: int,
    scale: float = Query(default=1.0, ge=MIN_RENDER_SCALE, le=MAX_RENDER_SCALE),
    handler: GetPageImageHandler = Depends(get_page_image_handler),
) -> Response:
    try:
        png = handler.handle(GetPageImageQuery(document_id=document_id, page_number=page_number, scale=scale))
    except PageNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return Response(content=png, media_type="image/png")
