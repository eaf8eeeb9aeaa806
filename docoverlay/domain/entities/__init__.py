"""Domain entities package"""

from .analysis_result import (
    AnalysisPage,
    AnalysisResult,
    BoundingRegion,
    DocumentElement,
    DocumentFieldEntry,
    DocumentRecord,
    KeyValuePair,
    Line,
    Span,
    Table,
    TableCell,
    Word,
)
from .document import Document, DocumentStatus, DocumentType
from .extracted_field import ExtractedField

__all__ = [
    "AnalysisPage",
    "AnalysisResult",
    "BoundingRegion",
    "DocumentElement",
    "DocumentFieldEntry",
    "DocumentRecord",
    "KeyValuePair",
    "Line",
    "Span",
    "Table",
    "TableCell",
    "Word",
    "Document",
    "DocumentStatus",
    "DocumentType",
    "ExtractedField",
]
