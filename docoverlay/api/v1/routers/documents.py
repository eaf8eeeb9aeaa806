"""Document upload, listing and analysis lifecycle routes for v1 endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, Query, UploadFile

from docoverlay.api.schemas import (
    CancelResponseSchema,
    DocumentDetailSchema,
    DocumentListResponseSchema,
    OperationStatusSchema,
    UploadResponseSchema,
    detail_to_schema,
    status_to_schema,
    summary_to_schema,
)
from docoverlay.api.v1.dependencies import (
    get_cancel_analysis_handler,
    get_delete_document_handler,
    get_document_handler,
    get_list_documents_handler,
    get_operation_status_handler,
    get_start_analysis_handler,
    get_upload_document_handler,
)
from docoverlay.api.v1.errors import to_http_exception
from docoverlay.application.analysis_dispatcher import AnalysisAlreadyRunning
from docoverlay.application.commands.cancel_analysis import CancelAnalysisCommand, CancelAnalysisHandler
from docoverlay.application.commands.delete_document import DeleteDocumentCommand, DeleteDocumentHandler
from docoverlay.application.commands.start_analysis import StartAnalysisCommand, StartAnalysisHandler
from docoverlay.application.commands.upload_document import UploadDocumentCommand, UploadDocumentHandler
from docoverlay.application.queries.get_document import GetDocumentHandler, GetDocumentQuery
from docoverlay.application.queries.get_operation_status import (
    GetOperationStatusHandler,
    GetOperationStatusQuery,
)
from docoverlay.application.queries.list_documents import ListDocumentsHandler, ListDocumentsQuery
from docoverlay.domain.exceptions import ServiceError

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=UploadResponseSchema, status_code=202)
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    model_id: Optional[str] = Form(default=None, alias="modelId"),
    handler: UploadDocumentHandler = Depends(get_upload_document_handler),
    starter: StartAnalysisHandler = Depends(get_start_analysis_handler),
) -> UploadResponseSchema:
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")

    data = await file.read()
    try:
        document = handler.handle(
            UploadDocumentCommand(filename=file.filename, content=data, model_id=model_id)
        )
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    background_tasks.add_task(starter.handle, StartAnalysisCommand(document_id=document.document_id))
    return UploadResponseSchema(
        documentId=document.document_id,
        filename=document.filename,
        modelId=document.model_id,
        status=document.status.value,
    )


@router.get("", response_model=DocumentListResponseSchema)
def list_documents(
    status: Optional[str] = Query(default=None),
    handler: ListDocumentsHandler = Depends(get_list_documents_handler),
) -> DocumentListResponseSchema:
    summaries = handler.handle(ListDocumentsQuery(status=status))
    return DocumentListResponseSchema(
        documents=[summary_to_schema(dto) for dto in summaries],
        total=len(summaries),
    )


@router.get("/{document_id}", response_model=DocumentDetailSchema)
def get_document(
    document_id: str,
    handler: GetDocumentHandler = Depends(get_document_handler),
) -> DocumentDetailSchema:
    try:
        dto = handler.handle(GetDocumentQuery(document_id=document_id))
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return detail_to_schema(dto)


@router.delete("/{document_id}")
def delete_document(
    document_id: str,
    handler: DeleteDocumentHandler = Depends(get_delete_document_handler),
) -> dict:
    try:
        result = handler.handle(DeleteDocumentCommand(document_id=document_id))
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return {"documentId": result["document_id"], "deleted": result["deleted"]}


@router.get("/{document_id}/status", response_model=OperationStatusSchema)
def get_operation_status(
    document_id: str,
    handler: GetOperationStatusHandler = Depends(get_operation_status_handler),
) -> OperationStatusSchema:
    try:
        dto = handler.handle(GetOperationStatusQuery(document_id=document_id))
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return status_to_schema(dto)


@router.post("/{document_id}/analyze", response_model=UploadResponseSchema, status_code=202)
def start_analysis(
    document_id: str,
    handler: StartAnalysisHandler = Depends(get_start_analysis_handler),
) -> UploadResponseSchema:
    try:
        document = handler.handle(StartAnalysisCommand(document_id=document_id))
    except AnalysisAlreadyRunning as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return UploadResponseSchema(
        documentId=document.document_id,
        filename=document.filename,
        modelId=document.model_id,
        status=document.status.value,
    )


@router.post("/{document_id}/cancel", response_model=CancelResponseSchema)
def cancel_analysis(
    document_id: str,
    handler: CancelAnalysisHandler = Depends(get_cancel_analysis_handler),
) -> CancelResponseSchema:
    try:
        result = handler.handle(CancelAnalysisCommand(document_id=document_id))
    except ServiceError as exc:
        raise to_http_exception(exc) from exc
    return CancelResponseSchema(documentId=result["document_id"], cancelled=result["cancelled"])
