"""
Document Entity - an uploaded PDF and its analysis lifecycle.

Domain Rules:
- A document is replaced, never mutated: every change returns a new snapshot
- The analysis result and its extracted fields are swapped together so readers
  never observe fields minted from a different result
- Document type is inferred from the filename and selects the prebuilt model
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..value_objects.operation_status import OperationStatus
from .analysis_result import AnalysisResult
from .extracted_field import ExtractedField


class DocumentType(str, Enum):
    INVOICE = "invoice"
    CONTRACT = "contract"
    RECEIPT = "receipt"
    LAYOUT = "layout"
    CUSTOM = "custom"

    @classmethod
    def detect(cls, filename: str) -> DocumentType:
        """
        Guess the document type from its filename.

        Examples:
            >>> DocumentType.detect("ACME-Invoice-0042.pdf")
            <DocumentType.INVOICE: 'invoice'>
            >>> DocumentType.detect("scan.pdf")
            <DocumentType.LAYOUT: 'layout'>
        """
        name = (filename or "").lower()
        for candidate in (cls.INVOICE, cls.CONTRACT, cls.RECEIPT):
            if candidate.value in name:
                return candidate
        return cls.LAYOUT

    @property
    def model_id(self) -> str:
        return _MODEL_IDS.get(self, "prebuilt-layout")


_MODEL_IDS = {
    DocumentType.INVOICE: "prebuilt-invoice",
    DocumentType.CONTRACT: "prebuilt-contract",
    DocumentType.RECEIPT: "prebuilt-receipt",
    DocumentType.LAYOUT: "prebuilt-layout",
}


class DocumentStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Document:
    """Immutable snapshot of an uploaded document."""

    document_id: str
    filename: str
    content: bytes = field(repr=False)
    document_type: DocumentType = DocumentType.LAYOUT
    model_id: str = "prebuilt-layout"
    status: DocumentStatus = DocumentStatus.UPLOADED
    operation: Optional[OperationStatus] = None
    error_message: Optional[str] = None
    result: Optional[AnalysisResult] = field(default=None, repr=False)
    fields: Tuple[ExtractedField, ...] = field(default=(), repr=False)
    uploaded_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def create(
        cls,
        filename: str,
        content: bytes,
        *,
        model_id: Optional[str] = None,
        document_id: Optional[str] = None,
    ) -> Document:
        document_type = DocumentType.detect(filename)
        if model_id and model_id != document_type.model_id:
            document_type = next(
                (candidate for candidate, known in _MODEL_IDS.items() if known == model_id),
                DocumentType.CUSTOM,
            )
        return cls(
            document_id=document_id or uuid.uuid4().hex,
            filename=filename,
            content=content,
            document_type=document_type,
            model_id=model_id or document_type.model_id,
        )

    @property
    def size(self) -> int:
        return len(self.content)

    def _touch(self, **changes: Any) -> Document:
        return replace(self, updated_at=_utcnow(), **changes)

    def with_operation(self, operation: OperationStatus) -> Document:
        """Record the latest poll snapshot."""
        return self._touch(status=DocumentStatus.PROCESSING, operation=operation)

    def start_processing(self) -> Document:
        return self._touch(status=DocumentStatus.PROCESSING, operation=None, error_message=None)

    def with_analysis(self, result: AnalysisResult, fields: Tuple[ExtractedField, ...]) -> Document:
        """Replace result and fields atomically and mark the document completed."""
        return self._touch(
            status=DocumentStatus.COMPLETED,
            result=result,
            fields=tuple(fields),
            error_message=None,
        )

    def with_failure(self, message: str) -> Document:
        return self._touch(status=DocumentStatus.FAILED, error_message=message)

    def find_field(self, field_id: str) -> Optional[ExtractedField]:
        for extracted in self.fields:
            if extracted.id == field_id:
                return extracted
        return None

    def to_summary(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "filename": self.filename,
            "document_type": self.document_type.value,
            "model_id": self.model_id,
            "status": self.status.value,
            "size": self.size,
            "page_count": self.result.page_count if self.result else None,
            "field_count": len(self.fields),
            "error_message": self.error_message,
            "uploaded_at": self.uploaded_at,
            "updated_at": self.updated_at,
        }
