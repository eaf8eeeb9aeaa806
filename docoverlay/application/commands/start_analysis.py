"""StartAnalysis Command - schedules a background analysis run."""
from __future__ import annotations

from dataclasses import dataclass

from docoverlay.application.analysis_dispatcher import AnalysisDispatcher
from docoverlay.domain.entities.document import Document
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class StartAnalysisCommand:
    document_id: str


class StartAnalysisHandler:
    """Handles StartAnalysis commands, for fresh uploads and user retries."""

    def __init__(self, repository: DocumentRepository, dispatcher: AnalysisDispatcher):
        self._documents = repository
        self._dispatcher = dispatcher

    def handle(self, command: StartAnalysisCommand) -> Document:
        """
        Raises:
            DocumentNotFound: If the document does not exist
            AnalysisAlreadyRunning: If a run for the document is still active
        """
        document = self._documents.get(command.document_id)
        self._dispatcher.start(document.document_id)
        return document
