"""GetSelection Query - the shared selection / highlight of a document."""
from dataclasses import dataclass

from docoverlay.application.dto.field_dto import SelectionDTO
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class GetSelectionQuery:
    document_id: str


class GetSelectionHandler:
    def __init__(self, repository: DocumentRepository, selections: SelectionRegistry):
        self._documents = repository
        self._selections = selections

    def handle(self, query: GetSelectionQuery) -> SelectionDTO:
        document = self._documents.get(query.document_id)
        state = self._selections.linker_for(document.document_id).snapshot()
        return SelectionDTO.from_state(document.document_id, state)
