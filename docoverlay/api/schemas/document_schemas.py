"""
Schemas for document upload, listing and status endpoints
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from docoverlay.application.dto.document_dto import (
    DocumentDetailDTO,
    DocumentSummaryDTO,
    OperationStatusDTO,
)


class UploadResponseSchema(BaseModel):
    documentId: str
    filename: str
    modelId: str
    status: str


class DocumentSummarySchema(BaseModel):
    documentId: str
    filename: str
    documentType: str
    modelId: str
    status: str
    size: int
    pageCount: Optional[int] = None
    fieldCount: int = 0
    errorMessage: Optional[str] = None
    uploadedAt: datetime
    updatedAt: datetime


class OperationStatusSchema(BaseModel):
    documentId: str
    documentStatus: str
    state: Optional[str] = None
    operationHandle: Optional[str] = None
    attempt: Optional[int] = None
    pollCount: int = 0
    percentCompleted: Optional[float] = None
    errorMessage: Optional[str] = None
    observedAt: Optional[datetime] = None


class PageInfoSchema(BaseModel):
    pageNumber: int
    width: float
    height: float
    unit: Optional[str] = None
    wordCount: int = 0
    lineCount: int = 0


class DocumentDetailSchema(DocumentSummarySchema):
    operation: OperationStatusSchema
    pages: List[PageInfoSchema] = Field(default_factory=list)
    tableCount: int = 0
    keyValuePairCount: int = 0
    contentLength: int = 0


class DocumentListResponseSchema(BaseModel):
    documents: List[DocumentSummarySchema] = Field(default_factory=list)
    total: int = 0


class CancelResponseSchema(BaseModel):
    documentId: str
    cancelled: bool


def summary_to_schema(dto: DocumentSummaryDTO) -> DocumentSummarySchema:
    return DocumentSummarySchema(
        documentId=dto.document_id,
        filename=dto.filename,
        documentType=dto.document_type,
        modelId=dto.model_id,
        status=dto.status,
        size=dto.size,
        pageCount=dto.page_count,
        fieldCount=dto.field_count,
        errorMessage=dto.error_message,
        uploadedAt=dto.uploaded_at,
        updatedAt=dto.updated_at,
    )


def status_to_schema(dto: OperationStatusDTO) -> OperationStatusSchema:
    return OperationStatusSchema(
        documentId=dto.document_id,
        documentStatus=dto.document_status,
        state=dto.state,
        operationHandle=dto.operation_handle,
        attempt=dto.attempt,
        pollCount=dto.poll_count,
        percentCompleted=dto.percent_completed,
        errorMessage=dto.error_message,
        observedAt=dto.observed_at,
    )


def detail_to_schema(dto: DocumentDetailDTO) -> DocumentDetailSchema:
    summary = summary_to_schema(dto.summary)
    return DocumentDetailSchema(
        **summary.model_dump(),
        operation=status_to_schema(dto.status),
        pages=[
            PageInfoSchema(
                pageNumber=page.page_number,
                width=page.width,
                height=page.height,
                unit=page.unit,
                wordCount=page.word_count,
                lineCount=page.line_count,
            )
            for page in dto.pages
        ],
        tableCount=dto.table_count,
        keyValuePairCount=dto.key_value_pair_count,
        contentLength=dto.content_length,
    )
