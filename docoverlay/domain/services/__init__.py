"""
Domain Services

Stateless operations over domain entities: geometry projection, page
resolution, decomposition of analysis results, overlay projection, result
filtering and the shared selection holder.
"""
from .field_decomposer import FieldDecomposer, format_field_name
from .field_filter import FieldFilter, FilterOptions
from .geometry_mapper import canvas_to_document, polygon_to_canvas
from .overlay_projector import BoundingBox, OverlayProjector, color_for_kind, opacity_for_confidence
from .selection_linker import SelectionLinker
from .span_locator import page_for_span

__all__ = [
    'FieldDecomposer',
    'format_field_name',
    'FieldFilter',
    'FilterOptions',
    'polygon_to_canvas',
    'canvas_to_document',
    'BoundingBox',
    'OverlayProjector',
    'color_for_kind',
    'opacity_for_confidence',
    'SelectionLinker',
    'page_for_span',
]
