"""AnalyzeDocument Command - runs one document through the remote engine.

Orchestration only: the poller talks to the engine, the decomposer flattens
the result, and the repository receives every new snapshot. Every write is a
single repository update, so a document deleted mid-run stays deleted and
result and fields are never seen half-replaced.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Protocol

from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.entities.document import Document, DocumentStatus
from docoverlay.domain.exceptions import DocumentNotFound, to_service_error, user_message
from docoverlay.domain.repositories.document_repository import DocumentRepository
from docoverlay.domain.services.field_decomposer import FieldDecomposer
from docoverlay.domain.value_objects.operation_status import OperationStatus

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Analysis was cancelled"


class Poller(Protocol):
    def run(
        self,
        file_bytes: bytes,
        model_id: str,
        *,
        on_status=None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[AnalysisResult]: ...


@dataclass(frozen=True)
class AnalyzeDocumentCommand:
    document_id: str


class AnalyzeDocumentHandler:
    """Handles AnalyzeDocument commands."""

    def __init__(
        self,
        repository: DocumentRepository,
        poller: Poller,
        decomposer: FieldDecomposer,
        selections: SelectionRegistry,
    ):
        self._documents = repository
        self._poller = poller
        self._decomposer = decomposer
        self._selections = selections

    def handle(
        self,
        command: AnalyzeDocumentCommand,
        cancel_event: Optional[threading.Event] = None,
    ) -> Optional[Document]:
        """
        Analyse the document and store the outcome.

        Returns:
            The completed document, or ``None`` when the run was cancelled or
            the document was deleted meanwhile

        Raises:
            DocumentNotFound: If the document does not exist
            ServiceError: After recording the failure on the document
        """
        document = self._documents.update(command.document_id, lambda current: current.start_processing())
        if document is None:
            raise DocumentNotFound(command.document_id)

        def on_status(status: OperationStatus) -> None:
            self._documents.update(command.document_id, lambda current: current.with_operation(status))

        try:
            result = self._poller.run(
                document.content,
                document.model_id,
                on_status=on_status,
                cancel_event=cancel_event,
            )
        except Exception as exc:
            error = to_service_error(exc, {"document_id": command.document_id})
            self._record_failure(command.document_id, user_message(error))
            if error is exc:
                raise
            raise error from exc

        if result is None:
            self._record_failure(command.document_id, CANCELLED_MESSAGE)
            return None

        fields = self._decomposer.decompose(result)
        completed = self._documents.update(
            command.document_id,
            lambda current: current.with_analysis(result, fields),
        )
        if completed is None:
            logger.info("Document %s was deleted during analysis", command.document_id)
            return None

        self._selections.reset(command.document_id)
        logger.info(
            "Replaced analysis result for %s",
            command.document_id,
            extra={"document_id": command.document_id, "field_count": len(fields)},
        )
        return completed

    def _record_failure(self, document_id: str, message: str) -> None:
        def fail(current: Document) -> Optional[Document]:
            if current.status == DocumentStatus.COMPLETED:
                return None
            return current.with_failure(message)

        self._documents.update(document_id, fail)
