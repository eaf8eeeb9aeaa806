"""
Unit tests for the document, status, field and overlay query handlers.
"""
from unittest.mock import Mock

import pytest

from docoverlay.application.queries.get_document import GetDocumentHandler, GetDocumentQuery
from docoverlay.application.queries.get_operation_status import GetOperationStatusHandler, GetOperationStatusQuery
from docoverlay.application.queries.get_page_image import GetPageImageHandler, GetPageImageQuery
from docoverlay.application.queries.get_page_overlay import (
    GetPageOverlayHandler,
    GetPageOverlayQuery,
    PageNotFound,
)
from docoverlay.application.queries.list_documents import ListDocumentsHandler, ListDocumentsQuery
from docoverlay.application.queries.list_extracted_fields import (
    ListExtractedFieldsHandler,
    ListExtractedFieldsQuery,
)
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.entities.document import Document
from docoverlay.domain.exceptions import DocumentNotFound
from docoverlay.domain.services.field_decomposer import FieldDecomposer
from docoverlay.domain.services.field_filter import FieldFilter
from docoverlay.domain.services.overlay_projector import OverlayProjector
from docoverlay.domain.value_objects.field_kind import FieldKind
from docoverlay.domain.value_objects.operation_status import OperationState, OperationStatus
from docoverlay.infrastructure.pdf.pdf_renderer import RenderSize
from docoverlay.infrastructure.persistence.in_memory_document_repository import InMemoryDocumentRepository


@pytest.fixture
def repo(analyze_result_payload):
    result = AnalysisResult.from_dict(analyze_result_payload)
    repository = InMemoryDocumentRepository()
    analysed = Document.create("invoice.pdf", b"%PDF-1.4", document_id="done")
    repository.save(analysed.with_analysis(result, FieldDecomposer().decompose(result)))
    repository.save(Document.create("scan.pdf", b"%PDF-1.4", document_id="fresh"))
    return repository


@pytest.fixture
def renderer():
    fake = Mock()
    # US Letter in PDF points.
    fake.page_size.return_value = RenderSize(width=612, height=792)
    fake.render_png.return_value = b"\x89PNG"
    return fake


@pytest.fixture
def selections():
    return SelectionRegistry()


class TestListDocuments:
    def test_all(self, repo):
        summaries = ListDocumentsHandler(repo).handle(ListDocumentsQuery())
        assert {summary.document_id for summary in summaries} == {"done", "fresh"}

    def test_status_filter(self, repo):
        summaries = ListDocumentsHandler(repo).handle(ListDocumentsQuery(status="COMPLETED"))
        assert [summary.document_id for summary in summaries] == ["done"]
        assert summaries[0].field_count == 15
        assert summaries[0].page_count == 2


class TestGetDocument:
    def test_detail(self, repo):
        detail = GetDocumentHandler(repo).handle(GetDocumentQuery(document_id="done"))
        assert [page.page_number for page in detail.pages] == [1, 2]
        assert detail.pages[0].word_count == 2
        assert detail.table_count == 1
        assert detail.key_value_pair_count == 1
        assert detail.status.document_status == "completed"

    def test_not_analysed_yet(self, repo):
        detail = GetDocumentHandler(repo).handle(GetDocumentQuery(document_id="fresh"))
        assert detail.pages == []
        assert detail.content_length == 0

    def test_missing(self, repo):
        with pytest.raises(DocumentNotFound):
            GetDocumentHandler(repo).handle(GetDocumentQuery(document_id="missing"))


class TestGetOperationStatus:
    def test_latest_snapshot(self, repo):
        status = OperationStatus.submitted("op-1").advance(OperationState.RUNNING, percent_completed=30)
        repo.save(repo.get("fresh").with_operation(status))

        dto = GetOperationStatusHandler(repo).handle(GetOperationStatusQuery(document_id="fresh"))

        assert dto.state == "running"
        assert dto.poll_count == 1
        assert dto.percent_completed == 30
        assert dto.document_status == "processing"

    def test_no_operation_yet(self, repo):
        dto = GetOperationStatusHandler(repo).handle(GetOperationStatusQuery(document_id="fresh"))
        assert dto.state is None
        assert dto.document_status == "uploaded"


class TestListExtractedFields:
    def test_filtered_list_keeps_unfiltered_counts(self, repo):
        handler = ListExtractedFieldsHandler(repo, FieldFilter())

        dto = handler.handle(ListExtractedFieldsQuery(document_id="done", kinds=frozenset({FieldKind.TABLE_CELL})))

        assert [extracted.id for extracted in dto.fields] == [f"table-0-cell-{i}" for i in range(4)]
        assert dto.total == 4
        assert dto.counts["all"] == 15
        assert dto.counts["word"] == 3
        assert dto.counts["document_field"] == 3

    def test_page_and_search(self, repo):
        handler = ListExtractedFieldsHandler(repo, FieldFilter())

        dto = handler.handle(ListExtractedFieldsQuery(document_id="done", page_number=2, search="page"))

        assert [extracted.id for extracted in dto.fields] == ["word-2", "line-2", "doc-field-0-PageNote-0"]

    def test_inverted_range(self, repo):
        handler = ListExtractedFieldsHandler(repo, FieldFilter())
        with pytest.raises(ValueError):
            handler.handle(ListExtractedFieldsQuery(document_id="done", min_confidence=0.9, max_confidence=0.1))


class TestGetPageOverlay:
    def test_default_canvas_is_unscaled_page_size(self, repo, renderer, selections):
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)

        dto = handler.handle(GetPageOverlayQuery(document_id="done", page_number=1, scale=2.0))

        renderer.page_size.assert_called_once_with(b"%PDF-1.4", 1, 1.0)
        assert (dto.canvas_width, dto.canvas_height) == (612, 792)
        ids = [box.id for box in dto.boxes]
        assert "word-0" in ids
        assert "line-0" not in ids
        assert "doc-field-0-PageNote-0" not in ids
        word = dto.boxes[ids.index("word-0")]
        # 1 inch on an 8.5 inch page, 612 points wide, zoomed 2x
        assert word.rect.x == pytest.approx(144)
        assert word.rect.width == pytest.approx(144)

    def test_selection_is_reflected(self, repo, renderer, selections):
        selections.linker_for("done").select("word-1")
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)

        dto = handler.handle(
            GetPageOverlayQuery(document_id="done", page_number=1, canvas_width=850, canvas_height=1100)
        )

        renderer.page_size.assert_not_called()
        selected = [box.id for box in dto.boxes if box.is_selected]
        assert selected == ["word-1"]
        assert dto.selection.selected_id == "word-1"

    def test_kinds(self, repo, renderer, selections):
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)

        dto = handler.handle(
            GetPageOverlayQuery(document_id="done", page_number=2, kinds=frozenset({FieldKind.LINE}))
        )

        assert [box.id for box in dto.boxes] == ["line-2"]

    def test_not_analysed_yet_has_no_boxes(self, repo, renderer, selections):
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)
        dto = handler.handle(GetPageOverlayQuery(document_id="fresh", page_number=1))
        assert dto.boxes == []

    def test_page_outside_pdf(self, repo, renderer, selections):
        renderer.page_size.side_effect = ValueError("Page 9 is out of range")
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)
        with pytest.raises(PageNotFound):
            handler.handle(GetPageOverlayQuery(document_id="done", page_number=9))

    def test_page_outside_result(self, repo, renderer, selections):
        handler = GetPageOverlayHandler(repo, renderer, OverlayProjector(), selections)
        with pytest.raises(PageNotFound):
            handler.handle(GetPageOverlayQuery(document_id="done", page_number=3))


class TestGetPageImage:
    def test_renders(self, repo, renderer):
        data = GetPageImageHandler(repo, renderer).handle(GetPageImageQuery(document_id="done", page_number=1, scale=1.5))
        assert data == b"\x89PNG"
        renderer.render_png.assert_called_once_with(b"%PDF-1.4", 1, 1.5)

    def test_out_of_range(self, repo, renderer):
        renderer.render_png.side_effect = ValueError("out of range")
        with pytest.raises(PageNotFound):
            GetPageImageHandler(repo, renderer).handle(GetPageImageQuery(document_id="done", page_number=7))
