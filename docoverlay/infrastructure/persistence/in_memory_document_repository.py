"""In-memory implementation of DocumentRepository."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional

from docoverlay.domain.entities.document import Document
from docoverlay.domain.repositories.document_repository import (
    DocumentChange,
    DocumentListener,
    DocumentRepository,
)

logger = logging.getLogger(__name__)


class InMemoryDocumentRepository(DocumentRepository):
    """Keep document snapshots in a dict guarded by a lock.

    Listeners are called outside the lock, after the snapshot is stored.
    """

    def __init__(self) -> None:
        self._documents: Dict[str, Document] = {}
        self._listeners: List[DocumentListener] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def save(self, document: Document) -> None:
        with self._lock:
            self._documents[document.document_id] = document
            listeners = list(self._listeners)
        self._notify(document, listeners)

    def update(self, document_id: str, change: DocumentChange) -> Optional[Document]:
        with self._lock:
            current = self._documents.get(document_id)
            if current is None:
                return None
            updated = change(current)
            if updated is None:
                return current
            self._documents[document_id] = updated
            listeners = list(self._listeners)
        self._notify(updated, listeners)
        return updated

    def find_by_id(self, document_id: str) -> Optional[Document]:
        with self._lock:
            return self._documents.get(document_id)

    def find_all(self) -> List[Document]:
        with self._lock:
            documents = list(self._documents.values())
        documents.sort(key=lambda document: document.uploaded_at, reverse=True)
        return documents

    def delete(self, document_id: str) -> bool:
        with self._lock:
            removed = self._documents.pop(document_id, None)
        if removed is None:
            return False
        logger.info("Deleted document %s", document_id)
        return True

    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def count(self) -> int:
        with self._lock:
            return len(self._documents)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _notify(document: Document, listeners: List[DocumentListener]) -> None:
        logger.debug("Saved document %s (%s)", document.document_id, document.status.value)
        for listener in listeners:
            try:
                listener(document)
            except Exception:
                logger.exception("Document listener failed for %s", document.document_id)
