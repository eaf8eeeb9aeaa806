"""
SelectionLinker domain service.

Single holder of the selected / highlighted field ids shared by the overlay
and the results list. Readers get immutable :class:`SelectionState`
snapshots; writers go through :meth:`select`, :meth:`hover` and
:meth:`clear_selection`. Subscribers are notified after every change.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from docoverlay.domain.value_objects.selection_state import EMPTY_SELECTION, SelectionState

logger = logging.getLogger(__name__)

SelectionListener = Callable[[SelectionState], None]


class SelectionLinker:
    """Mutually exclusive selection and highlight state."""

    def __init__(self, state: SelectionState = EMPTY_SELECTION):
        self._state = state
        self._lock = threading.Lock()
        self._listeners: List[SelectionListener] = []

    @property
    def selected_id(self) -> Optional[str]:
        return self._state.selected_id

    @property
    def highlighted_id(self) -> Optional[str]:
        return self._state.highlighted_id

    def snapshot(self) -> SelectionState:
        return self._state

    def select(self, field_id: str) -> SelectionState:
        """Select ``field_id``; any highlight is cleared."""
        return self._update(lambda _: SelectionState(selected_id=field_id))

    def hover(self, field_id: Optional[str]) -> SelectionState:
        """
        Highlight ``field_id`` unless something is selected.

        ``None`` always clears the highlight.
        """
        def apply(current: SelectionState) -> SelectionState:
            if field_id is None:
                return SelectionState(selected_id=current.selected_id)
            if current.selected_id is not None:
                return current
            return SelectionState(highlighted_id=field_id)

        return self._update(apply)

    def clear_selection(self) -> SelectionState:
        """Drop the selection, e.g. after a click outside every box."""
        return self._update(lambda current: SelectionState(highlighted_id=current.highlighted_id))

    def reset(self) -> SelectionState:
        """Clear both ids; used when the field list is replaced."""
        return self._update(lambda _: EMPTY_SELECTION)

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _update(self, apply: Callable[[SelectionState], SelectionState]) -> SelectionState:
        with self._lock:
            previous = self._state
            self._state = apply(previous)
            state = self._state
            listeners = list(self._listeners) if state != previous else []

        for listener in listeners:
            try:
                listener(state)
            except Exception:
                logger.exception("Selection listener failed")
        return state
