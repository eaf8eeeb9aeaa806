"""
Unit tests for OverlayProjector domain service.
"""
import pytest

from docoverlay.domain.entities.extracted_field import ExtractedField
from docoverlay.domain.services.overlay_projector import (
    DEFAULT_COLOR,
    OverlayProjector,
    color_for_kind,
    opacity_for_confidence,
)
from docoverlay.domain.value_objects.confidence import Confidence
from docoverlay.domain.value_objects.field_kind import ALL_KINDS, FieldKind
from docoverlay.domain.value_objects.geometry import PageSize, Point, Polygon

PAGE = PageSize(page_number=1, width=100, height=100)


def make_field(field_id, kind=FieldKind.WORD, page=1, polygon=(0, 0, 10, 0, 10, 10, 0, 10), confidence=0.95):
    return ExtractedField(
        id=field_id,
        kind=kind,
        label=field_id,
        value=field_id,
        confidence=Confidence(confidence),
        page_number=page,
        polygon=Polygon(polygon) if polygon else None,
    )


@pytest.fixture
def projector():
    return OverlayProjector()


def project(projector, fields, **kwargs):
    return projector.project(fields, page=PAGE, canvas_width=200, canvas_height=200, **kwargs)


class TestFiltering:
    def test_other_pages_are_dropped(self, projector):
        boxes = project(projector, [make_field("a"), make_field("b", page=2)])
        assert [box.id for box in boxes] == ["a"]

    def test_lines_hidden_by_default(self, projector):
        fields = [make_field("word"), make_field("line", kind=FieldKind.LINE)]
        assert [box.id for box in project(projector, fields)] == ["word"]
        assert [box.id for box in project(projector, fields, visible_kinds=ALL_KINDS)] == ["word", "line"]

    def test_empty_kind_set_hides_everything(self, projector):
        assert project(projector, [make_field("a")], visible_kinds=frozenset()) == []

    def test_fields_without_geometry_are_dropped(self, projector):
        assert project(projector, [make_field("a", polygon=None)]) == []


class TestProjection:
    def test_rect_is_scaled(self, projector):
        box = project(projector, [make_field("a")], scale=2.0)[0]
        assert (box.rect.x, box.rect.y, box.rect.width, box.rect.height) == (0, 0, 40, 40)

    def test_color_and_opacity(self, projector):
        box = project(projector, [make_field("cell", kind=FieldKind.TABLE_CELL, confidence=0.55)])[0]
        assert box.color == color_for_kind(FieldKind.TABLE_CELL)
        assert box.opacity == 0.4
        assert box.confidence == 0.55

    def test_to_dict_flattens_rect(self, projector):
        payload = project(projector, [make_field("a")])[0].to_dict()
        assert payload["kind"] == "word"
        assert payload["width"] == 20
        assert len(payload["points"]) == 4


class TestSelectionFlags:
    def test_selection_suppresses_highlight(self, projector):
        boxes = project(projector, [make_field("a"), make_field("b")], selected_id="a", highlighted_id="b")
        assert boxes[0].is_selected
        assert not boxes[1].is_highlighted

    def test_highlight_without_selection(self, projector):
        boxes = project(projector, [make_field("a"), make_field("b")], highlighted_id="b")
        assert [box.is_highlighted for box in boxes] == [False, True]
        assert not any(box.is_selected for box in boxes)


class TestHitTesting:
    def test_last_box_wins_on_overlap(self, projector):
        fields = [make_field("under"), make_field("over", polygon=(5, 5, 20, 5, 20, 20, 5, 20))]
        boxes = project(projector, fields)
        assert OverlayProjector.box_at(boxes, Point(15, 15)).id == "over"
        assert OverlayProjector.box_at(boxes, Point(2, 2)).id == "under"

    def test_miss(self, projector):
        boxes = project(projector, [make_field("a")])
        assert OverlayProjector.box_at(boxes, Point(150, 150)) is None


def test_module_helpers():
    assert color_for_kind(None) == DEFAULT_COLOR
    assert opacity_for_confidence(0.95) == 0.8
    assert opacity_for_confidence(None) == 0.2
