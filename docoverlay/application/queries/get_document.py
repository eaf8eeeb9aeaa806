"""
GetDocument Query - document summary, latest status and page geometry.
"""
from dataclasses import dataclass

from docoverlay.application.dto.document_dto import (
    DocumentDetailDTO,
    DocumentSummaryDTO,
    OperationStatusDTO,
    PageInfoDTO,
)
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class GetDocumentQuery:
    document_id: str


class GetDocumentHandler:
    """Handles GetDocument queries."""

    def __init__(self, repository: DocumentRepository):
        self._documents = repository

    def handle(self, query: GetDocumentQuery) -> DocumentDetailDTO:
        """
        Raises:
            DocumentNotFound: If the document does not exist
        """
        document = self._documents.get(query.document_id)
        result = document.result

        pages = []
        if result is not None:
            pages = [
                PageInfoDTO(
                    page_number=page.page_number,
                    width=page.width,
                    height=page.height,
                    unit=page.unit,
                    word_count=len(page.words),
                    line_count=len(page.lines or ()),
                )
                for page in result.pages
            ]

        return DocumentDetailDTO(
            summary=DocumentSummaryDTO.from_document(document),
            status=OperationStatusDTO.from_document(document),
            pages=pages,
            table_count=len(result.tables or ()) if result else 0,
            key_value_pair_count=len(result.key_value_pairs or ()) if result else 0,
            content_length=len(result.content) if result else 0,
        )
