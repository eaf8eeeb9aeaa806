"""Tests for the selection command and query handlers."""
from __future__ import annotations

import pytest

from docoverlay.application.commands.update_selection import (
    SelectionAction,
    UnknownField,
    UpdateSelectionCommand,
    UpdateSelectionHandler,
)
from docoverlay.application.queries.get_selection import GetSelectionHandler, GetSelectionQuery
from docoverlay.application.selection_registry import SelectionRegistry
from docoverlay.domain.entities.analysis_result import AnalysisResult
from docoverlay.domain.entities.document import Document
from docoverlay.domain.exceptions import DocumentNotFound
from docoverlay.domain.services.field_decomposer import FieldDecomposer
from docoverlay.infrastructure.persistence.in_memory_document_repository import InMemoryDocumentRepository


@pytest.fixture
def repo(analyze_result_payload):
    result = AnalysisResult.from_dict(analyze_result_payload)
    document = Document.create("invoice.pdf", b"%PDF-1.4", document_id="doc-1")
    repository = InMemoryDocumentRepository()
    repository.save(document.with_analysis(result, FieldDecomposer().decompose(result)))
    return repository


@pytest.fixture
def selections():
    return SelectionRegistry()


@pytest.fixture
def handler(repo, selections):
    return UpdateSelectionHandler(repo, selections)


def command(action, field_id=None):
    return UpdateSelectionCommand(document_id="doc-1", action=action, field_id=field_id)


def test_select(handler):
    dto = handler.handle(command(SelectionAction.SELECT, "word-1"))
    assert dto.selected_id == "word-1"
    assert dto.highlighted_id is None


def test_hover_then_select_clears_highlight(handler):
    assert handler.handle(command(SelectionAction.HOVER, "word-0")).highlighted_id == "word-0"
    dto = handler.handle(command(SelectionAction.SELECT, "table-0-cell-2"))
    assert dto.highlighted_id is None


def test_hover_ignored_while_selected(handler):
    handler.handle(command(SelectionAction.SELECT, "word-1"))
    dto = handler.handle(command(SelectionAction.HOVER, "word-0"))
    assert dto.selected_id == "word-1"
    assert dto.highlighted_id is None


def test_clear(handler):
    handler.handle(command(SelectionAction.SELECT, "word-1"))
    assert handler.handle(command(SelectionAction.CLEAR)).selected_id is None


def test_select_requires_field_id(handler):
    with pytest.raises(UnknownField):
        handler.handle(command(SelectionAction.SELECT))


def test_unknown_field_id(handler):
    with pytest.raises(UnknownField):
        handler.handle(command(SelectionAction.HOVER, "word-999"))


def test_unknown_document(handler):
    with pytest.raises(DocumentNotFound):
        handler.handle(UpdateSelectionCommand(document_id="nope", action=SelectionAction.CLEAR))


def test_both_views_read_the_same_state(handler, repo, selections):
    handler.handle(command(SelectionAction.SELECT, "kvp-value-0"))
    dto = GetSelectionHandler(repo, selections).handle(GetSelectionQuery(document_id="doc-1"))
    assert dto.selected_id == "kvp-value-0"
