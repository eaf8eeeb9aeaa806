"""DeleteDocument Command - removes a document and its session state.

An analysis still running for the document is cancelled first.
"""
from dataclasses import dataclass
from typing import Any, Dict

from docoverlay.application.analysis_dispatcher import AnalysisDispatcher
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.exceptions import DocumentNotFound
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class DeleteDocumentCommand:
    document_id: str


class DeleteDocumentHandler:
    """Handles DeleteDocument commands."""

    def __init__(
        self,
        repository: DocumentRepository,
        dispatcher: AnalysisDispatcher,
        selections: SelectionRegistry,
    ):
        self._documents = repository
        self._dispatcher = dispatcher
        self._selections = selections

    def handle(self, command: DeleteDocumentCommand) -> Dict[str, Any]:
        if self._documents.find_by_id(command.document_id) is None:
            raise DocumentNotFound(command.document_id)
        self._dispatcher.cancel(command.document_id)
        self._documents.delete(command.document_id)
        self._selections.discard(command.document_id)
        return {"document_id": command.document_id, "deleted": True}
