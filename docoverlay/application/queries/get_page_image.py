"""GetPageImage Query - PNG rendering of one page."""
from dataclasses import dataclass

from docoverlay.application.queries.get_page_overlay import PageNotFound, PageRenderer
from docoverlay.domain.repositories.document_repository import DocumentRepository


@dataclass(frozen=True)
class GetPageImageQuery:
    document_id: str
    page_number: int
    scale: float = 1.0


class GetPageImageHandler:
    def __init__(self, repository: DocumentRepository, renderer: PageRenderer):
        self._documents = repository
        self._renderer = renderer

    def handle(self, query: GetPageImageQuery) -> bytes:
        document = self._documents.get(query.document_id)
        try:
            return self._renderer.render_png(document.content, query.page_number, query.scale)
        except ValueError as exc:
            raise PageNotFound(str(exc)) from exc
