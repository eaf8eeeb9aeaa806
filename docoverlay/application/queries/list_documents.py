"""ListDocuments Query - summaries of every uploaded document, newest first."""
from dataclasses import dataclass
from typing import List, Optional

from docoverlay.application.dto.document_dto import DocumentSummaryDTO
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class ListDocumentsQuery:
    status: Optional[str] = None


class ListDocumentsHandler:
    def __init__(self, repository: DocumentRepository):
        self._documents = repository

    def handle(self, query: ListDocumentsQuery) -> List[DocumentSummaryDTO]:
        documents = self._documents.find_all()
        if query.status:
            wanted = query.status.lower()
            documents = [document for document in documents if document.status.value == wanted]
        return [DocumentSummaryDTO.from_document(document) for document in documents]
