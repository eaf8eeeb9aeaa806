"""
API Schemas - organized by domain
"""
from .common_schemas import BoundingBoxSchema, PointSchema, SelectionSchema
from .document_schemas import (
    CancelResponseSchema,
    DocumentDetailSchema,
    DocumentListResponseSchema,
    DocumentSummarySchema,
    OperationStatusSchema,
    PageInfoSchema,
    UploadResponseSchema,
    detail_to_schema,
    status_to_schema,
    summary_to_schema,
)
from .field_schemas import (
    ExtractedFieldSchema,
    ExtractedFieldsResponseSchema,
    OverlayBoxSchema,
    PageOverlaySchema,
    SelectionRequestSchema,
    fields_to_schema,
    overlay_to_schema,
)

__all__ = [
    # Common
    "BoundingBoxSchema",
    "PointSchema",
    "SelectionSchema",
    # Document schemas
    "UploadResponseSchema",
    "DocumentSummarySchema",
    "DocumentDetailSchema",
    "DocumentListResponseSchema",
    "OperationStatusSchema",
    "PageInfoSchema",
    "CancelResponseSchema",
    "summary_to_schema",
    "status_to_schema",
    "detail_to_schema",
    # Field schemas
    "ExtractedFieldSchema",
    "ExtractedFieldsResponseSchema",
    "OverlayBoxSchema",
    "PageOverlaySchema",
    "SelectionRequestSchema",
    "fields_to_schema",
    "overlay_to_schema",
]
