"""
Data Transfer Objects for document-related queries and commands.

These DTOs serve as the boundary between the application layer and the API.
They are simple, serializable data structures without business logic.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from docoverlay.domain.entities.document import Document
from docoverlay.domain.value_objects.operation_status import OperationStatus


@dataclass(frozen=True)
class OperationStatusDTO:
    """Latest poll snapshot of a document's analysis."""

    document_id: str
    document_status: str
    state: Optional[str] = None
    operation_handle: Optional[str] = None
    attempt: Optional[int] = None
    poll_count: int = 0
    percent_completed: Optional[float] = None
    error_message: Optional[str] = None
    observed_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, document: Document) -> OperationStatusDTO:
        operation: Optional[OperationStatus] = document.operation
        if operation is None:
            return cls(
                document_id=document.document_id,
                document_status=document.status.value,
                error_message=document.error_message,
            )
        return cls(
            document_id=document.document_id,
            document_status=document.status.value,
            state=operation.state.value,
            operation_handle=operation.operation_handle,
            attempt=operation.attempt,
            poll_count=operation.poll_count,
            percent_completed=operation.percent_completed,
            error_message=document.error_message or operation.error_message,
            observed_at=operation.observed_at,
        )


@dataclass(frozen=True)
class DocumentSummaryDTO:
    document_id: str
    filename: str
    document_type: str
    model_id: str
    status: str
    size: int
    uploaded_at: datetime
    updated_at: datetime
    page_count: Optional[int] = None
    field_count: int = 0
    error_message: Optional[str] = None

    @classmethod
    def from_document(cls, document: Document) -> DocumentSummaryDTO:
        return cls(**document.to_summary())


@dataclass(frozen=True)
class PageInfoDTO:
    page_number: int
    width: float
    height: float
    unit: Optional[str] = None
    word_count: int = 0
    line_count: int = 0


@dataclass(frozen=True)
class DocumentDetailDTO:
    summary: DocumentSummaryDTO
    status: OperationStatusDTO
    pages: List[PageInfoDTO] = field(default_factory=list)
    table_count: int = 0
    key_value_pair_count: int = 0
    content_length: int = 0
