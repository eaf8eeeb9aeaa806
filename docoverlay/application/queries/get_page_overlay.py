"""
GetPageOverlay Query - projected bounding boxes for one rendered page.

The canvas defaults to the page's unscaled render size; ``scale`` is then
applied by the projector, so boxes line up with a page image rendered at the
same scale.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional, Protocol

from docoverlay.application.dto.field_dto import PageOverlayDTO
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.repositories.document_repository import DocumentRepository
from docoverlay.domain.services.overlay_projector import OverlayProjector
from docoverlay.domain.value_objects.field_kind import FieldKind
from docoverlay.domain.value_objects.geometry import PageSize


class PageNotFound(LookupError):
    """Raised when a page number is outside the document."""


class PageRenderer(Protocol):
    def page_size(self, pdf_bytes: bytes, page_number: int, scale: float = 1.0): ...

    def render_png(self, pdf_bytes: bytes, page_number: int, scale: float = 1.0) -> bytes: ...


@dataclass(frozen=True)
class GetPageOverlayQuery:
    document_id: str
    page_number: int
    scale: float = 1.0
    canvas_width: Optional[float] = None
    canvas_height: Optional[float] = None
    kinds: Optional[AbstractSet[FieldKind]] = None


class GetPageOverlayHandler:
    """Handles GetPageOverlay queries."""

    def __init__(
        self,
        repository: DocumentRepository,
        renderer: PageRenderer,
        projector: OverlayProjector,
        selections: SelectionRegistry,
    ):
        self._documents = repository
        self._renderer = renderer
        self._projector = projector
        self._selections = selections

    def handle(self, query: GetPageOverlayQuery) -> PageOverlayDTO:
        """
        Raises:
            DocumentNotFound: If the document does not exist
            PageNotFound: If the page is not part of the PDF or the result
        """
        document = self._documents.get(query.document_id)

        canvas_width, canvas_height = query.canvas_width, query.canvas_height
        if canvas_width is None or canvas_height is None:
            try:
                size = self._renderer.page_size(document.content, query.page_number, 1.0)
            except ValueError as exc:
                raise PageNotFound(str(exc)) from exc
            canvas_width = canvas_width or size.width
            canvas_height = canvas_height or size.height

        selection = self._selections.linker_for(document.document_id).snapshot()
        boxes = []
        result = document.result
        if result is not None:
            page = result.find_page(query.page_number)
            if page is None:
                raise PageNotFound(f"Page {query.page_number} is not part of the analysis result")
            boxes = self._projector.project(
                document.fields,
                page=PageSize(page.page_number, page.width, page.height),
                canvas_width=canvas_width,
                canvas_height=canvas_height,
                scale=query.scale,
                visible_kinds=query.kinds,
                selected_id=selection.selected_id,
                highlighted_id=selection.highlighted_id,
            )

        return PageOverlayDTO(
            document_id=document.document_id,
            page_number=query.page_number,
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            scale=query.scale,
            boxes=boxes,
            selection=selection,
        )
