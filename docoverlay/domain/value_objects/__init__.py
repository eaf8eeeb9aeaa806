"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .confidence import Confidence
from .field_kind import ALL_KINDS, DEFAULT_VISIBLE_KINDS, FieldKind
from .field_value import AmountValue, DateValue, FieldValue, ListValue, StringValue, parse_field_value
from .geometry import CanvasRect, PageSize, Point, Polygon
from .operation_status import OperationState, OperationStatus
from .selection_state import EMPTY_SELECTION, SelectionState

__all__ = [
    'Confidence',
    'FieldKind',
    'ALL_KINDS',
    'DEFAULT_VISIBLE_KINDS',
    'FieldValue',
    'StringValue',
    'DateValue',
    'AmountValue',
    'ListValue',
    'parse_field_value',
    'Point',
    'Polygon',
    'CanvasRect',
    'PageSize',
    'OperationState',
    'OperationStatus',
    'SelectionState',
    'EMPTY_SELECTION',
]
