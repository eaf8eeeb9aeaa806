"""Shared selection routes: the overlay and the results list read and write the same state."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from docoverlay.api.schemas import SelectionRequestSchema, SelectionSchema
from docoverlay.api.v1.dependencies import get_selection_handler, get_update_selection_handler
from docoverlay.api.v1.errors import to_http_exception
from docoverlay.application.commands.update_selection import (
    SelectionAction,
    UnknownField,
    UpdateSelectionCommand,
    UpdateSelectionHandler,
)
from docoverlay.application.dto.field_dto import SelectionDTO
from docoverlay.application.queries.get_selection import GetSelectionHandler, GetSelectionQuery
from docoverlay.domain.exceptions import ServiceError

router = APIRouter(prefix="/documents", tags=["selection"])


@router.get("/{document_id}/selection", response_model=SelectionSchema)
def get_selection(
    document_id: str,
    handler: GetSelectionHandler = Depends(get_selection_handler),
) -> SelectionSchema:
    try:
        dto = handler.handle(GetSelectionQuery(document_id=document_id))
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return _selection_to_schema(dto)


@router.post("/{document_id}/selection", response_model=SelectionSchema)
def update_selection(
    document_id: str,
    payload: SelectionRequestSchema,
    handler: UpdateSelectionHandler = Depends(get_update_selection_handler),
) -> SelectionSchema:
    command = UpdateSelectionCommand(
        document_id=document_id,
        action=SelectionAction(payload.action),
        field_id=payload.fieldId,
    )
    try:
        dto = handler.handle(command)
    except UnknownField as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return _selection_to_schema(dto)


def _selection_to_schema(dto: SelectionDTO) -> SelectionSchema:
    return SelectionSchema(
        documentId=dto.document_id,
        selectedId=dto.selected_id,
        highlightedId=dto.highlighted_id,
    )
