"""CancelAnalysis Command - abandons an in-flight poll.

The remote engine is not told; the run simply stops observing the operation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from docoverlay.application.analysis_dispatcher import AnalysisDispatcher
from docoverlay.application.commands.analyze_document import CANCELLED_MESSAGE
from docoverlay.domain.entities.document import Document, DocumentStatus
from docoverlay.domain.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CancelAnalysisCommand:
    document_id: str


def _mark_cancelled(current: Document) -> Optional[Document]:
    if current.status != DocumentStatus.PROCESSING:
        return None
    return current.with_failure(CANCELLED_MESSAGE)


class CancelAnalysisHandler:
    def __init__(self, repository: DocumentRepository, dispatcher: AnalysisDispatcher):
        self._documents = repository
        self._dispatcher = dispatcher

    def handle(self, command: CancelAnalysisCommand) -> Dict[str, Any]:
        document = self._documents.get(command.document_id)
        cancelled = self._dispatcher.cancel(document.document_id)
        if cancelled:
            self._documents.update(document.document_id, _mark_cancelled)
        return {"document_id": document.document_id, "cancelled": cancelled}
