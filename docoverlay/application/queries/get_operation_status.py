"""
GetOperationStatus Query - latest analysis status snapshot of a document.

Used by clients polling for progress while the background run is active.
"""
from dataclasses import dataclass

from docoverlay.application.dto.document_dto import OperationStatusDTO
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class GetOperationStatusQuery:
    document_id: str


class GetOperationStatusHandler:
    def __init__(self, repository: DocumentRepository):
        self._documents = repository

    def handle(self, query: GetOperationStatusQuery) -> OperationStatusDTO:
        return OperationStatusDTO.from_document(self._documents.get(query.document_id))
