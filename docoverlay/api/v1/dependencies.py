"""Shared FastAPI dependencies for v1 API routers.

These factories centralize construction of the repository, the remote engine
client and the command/query handlers so routers can depend on simple
callables. Tests swap any of them through ``app.dependency_overrides``.
"""
from __future__ import annotations

from functools import lru_cache

from docoverlay.application.analysis_dispatcher import AnalysisDispatcher
from docoverlay.application.commands.analyze_document import AnalyzeDocumentHandler
from docoverlay.application.commands.cancel_analysis import CancelAnalysisHandler
from docoverlay.application.commands.delete_document import DeleteDocumentHandler
from docoverlay.application.commands.start_analysis import StartAnalysisHandler
from docoverlay.application.commands.update_selection import UpdateSelectionHandler
from docoverlay.application.commands.upload_document import UploadDocumentHandler
from docoverlay.application.queries.get_document import GetDocumentHandler
from docoverlay.application.queries.get_operation_status import GetOperationStatusHandler
from docoverlay.application.queries.get_page_image import GetPageImageHandler
from docoverlay.application.queries.get_page_overlay import GetPageOverlayHandler
from docoverlay.application.queries.get_selection import GetSelectionHandler
from docoverlay.application.queries.list_documents import ListDocumentsHandler
from docoverlay.application.queries.list_extracted_fields import ListExtractedFieldsHandler
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.config import get_settings
from docoverlay.domain.repositories.document_repository import DocumentRepository
from docoverlay.domain.services.field_decomposer import FieldDecomposer
from docoverlay.domain.services.field_filter import FieldFilter
from docoverlay.domain.services.overlay_projector import OverlayProjector
from docoverlay.infrastructure.analysis.document_intelligence_client import DocumentIntelligenceClient
from docoverlay.infrastructure.analysis.operation_poller import OperationPoller
from docoverlay.infrastructure.pdf.pdf_renderer import PdfRenderer
from docoverlay.infrastructure.persistence.in_memory_document_repository import InMemoryDocumentRepository


@lru_cache()
def _document_repository() -> DocumentRepository:
    return InMemoryDocumentRepository()


def get_document_repository() -> DocumentRepository:
    """Provide a singleton document repository instance."""
    return _document_repository()


@lru_cache()
def _selection_registry() -> SelectionRegistry:
    return SelectionRegistry()


@lru_cache()
def _pdf_renderer() -> PdfRenderer:
    return PdfRenderer()


@lru_cache()
def _operation_poller() -> OperationPoller:
    settings = get_settings()
    return OperationPoller(
        DocumentIntelligenceClient(settings=settings),
        poll_interval=settings.poll_interval_seconds,
        max_retries=settings.max_retries,
        retry_backoff=settings.retry_backoff_seconds,
    )


@lru_cache()
def _analysis_dispatcher() -> AnalysisDispatcher:
    handler = AnalyzeDocumentHandler(
        _document_repository(),
        _operation_poller(),
        FieldDecomposer(),
        _selection_registry(),
    )
    return AnalysisDispatcher(handler)


def get_analysis_dispatcher() -> AnalysisDispatcher:
    """Provide the process-wide analysis dispatcher."""
    return _analysis_dispatcher()


@lru_cache()
def _get_upload_document_handler() -> UploadDocumentHandler:
    settings = get_settings()
    return UploadDocumentHandler(
        _document_repository(),
        min_bytes=settings.min_upload_bytes,
        max_bytes=settings.max_upload_bytes,
        default_model_id=settings.default_model_id,
    )


def get_upload_document_handler() -> UploadDocumentHandler:
    """Provide a cached upload document handler."""
    return _get_upload_document_handler()


def get_start_analysis_handler() -> StartAnalysisHandler:
    return StartAnalysisHandler(_document_repository(), _analysis_dispatcher())


def get_cancel_analysis_handler() -> CancelAnalysisHandler:
    return CancelAnalysisHandler(_document_repository(), _analysis_dispatcher())


def get_delete_document_handler() -> DeleteDocumentHandler:
    return DeleteDocumentHandler(_document_repository(), _analysis_dispatcher(), _selection_registry())


@lru_cache()
def _get_update_selection_handler() -> UpdateSelectionHandler:
    return UpdateSelectionHandler(_document_repository(), _selection_registry())


def get_update_selection_handler() -> UpdateSelectionHandler:
    """Provide a cached selection update handler."""
    return _get_update_selection_handler()


@lru_cache()
def _get_list_documents_handler() -> ListDocumentsHandler:
    return ListDocumentsHandler(_document_repository())


def get_list_documents_handler() -> ListDocumentsHandler:
    """Provide a cached document listing handler."""
    return _get_list_documents_handler()


@lru_cache()
def _get_document_handler() -> GetDocumentHandler:
    return GetDocumentHandler(_document_repository())


def get_document_handler() -> GetDocumentHandler:
    """Provide a cached document detail handler."""
    return _get_document_handler()


@lru_cache()
def _get_operation_status_handler() -> GetOperationStatusHandler:
    return GetOperationStatusHandler(_document_repository())


def get_operation_status_handler() -> GetOperationStatusHandler:
    """Provide a cached operation status handler."""
    return _get_operation_status_handler()


@lru_cache()
def _get_list_extracted_fields_handler() -> ListExtractedFieldsHandler:
    return ListExtractedFieldsHandler(_document_repository(), FieldFilter())


def get_list_extracted_fields_handler() -> ListExtractedFieldsHandler:
    """Provide a cached extracted fields handler."""
    return _get_list_extracted_fields_handler()


@lru_cache()
def _get_page_overlay_handler() -> GetPageOverlayHandler:
    return GetPageOverlayHandler(
        _document_repository(),
        _pdf_renderer(),
        OverlayProjector(),
        _selection_registry(),
    )


def get_page_overlay_handler() -> GetPageOverlayHandler:
    """Provide a cached page overlay handler."""
    return _get_page_overlay_handler()


@lru_cache()
def _get_page_image_handler() -> GetPageImageHandler:
    return GetPageImageHandler(_document_repository(), _pdf_renderer())


def get_page_image_handler() -> GetPageImageHandler:
    """Provide a cached page image handler."""
    return _get_page_image_handler()


@lru_cache()
def _get_selection_handler() -> GetSelectionHandler:
    return GetSelectionHandler(_document_repository(), _selection_registry())


def get_selection_handler() -> GetSelectionHandler:
    """Provide a cached selection read handler."""
    return _get_selection_handler()
