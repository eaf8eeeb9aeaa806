"""One SelectionLinker per document, created on first use."""
from __future__ import annotations

import threading
from typing import Dict

from docoverlay.domain.services.selection_linker import SelectionLinker


class SelectionRegistry:
    def __init__(self) -> None:
        self._linkers: Dict[str, SelectionLinker] = {}
        self._lock = threading.Lock()

    def linker_for(self, document_id: str) -> SelectionLinker:
        with self._lock:
            linker = self._linkers.get(document_id)
            if linker is None:
                linker = SelectionLinker()
                self._linkers[document_id] = linker
            return linker

    def reset(self, document_id: str) -> None:
        """Clear selection and highlight; field ids of a replaced list are stale."""
        with self._lock:
            linker = self._linkers.get(document_id)
        if linker is not None:
            linker.reset()

    def discard(self, document_id: str) -> None:
        with self._lock:
            self._linkers.pop(document_id, None)
