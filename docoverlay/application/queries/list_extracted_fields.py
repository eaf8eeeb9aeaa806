"""
ListExtractedFields Query - the filtered results list of a document.

The returned list is what export collaborators receive; counts are taken
over the unfiltered list so tabs keep their totals while filtering.
"""
from dataclasses import dataclass
from typing import AbstractSet, Optional

from docoverlay.application.dto.field_dto import ExtractedFieldsDTO
from docoverlay.domain.repositories.document_repository import DocumentRepository
from docoverlay.domain.services.field_filter import FieldFilter, FilterOptions
from docoverlay.domain.value_objects.field_kind import FieldKind


@dataclass(frozen=True)
class ListExtractedFieldsQuery:
    document_id: str
    kinds: Optional[AbstractSet[FieldKind]] = None
    min_confidence: float = 0.0
    max_confidence: float = 1.0
    search: str = ""
    page_number: Optional[int] = None


class ListExtractedFieldsHandler:
    def __init__(self, repository: DocumentRepository, field_filter: FieldFilter):
        self._documents = repository
        self._filter = field_filter

    def handle(self, query: ListExtractedFieldsQuery) -> ExtractedFieldsDTO:
        """
        Raises:
            DocumentNotFound: If the document does not exist
            ValueError: If the confidence range is inverted
        """
        document = self._documents.get(query.document_id)
        options = FilterOptions(
            kinds=query.kinds,
            min_confidence=query.min_confidence,
            max_confidence=query.max_confidence,
            search=query.search or "",
            page_number=query.page_number,
        )
        # One snapshot for both the list and the counts.
        fields = document.fields
        return ExtractedFieldsDTO(
            document_id=document.document_id,
            fields=self._filter.apply(fields, options),
            counts=self._filter.count_by_kind(fields),
        )
