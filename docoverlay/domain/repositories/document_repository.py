"""Document repository interface (Abstract Base Class)."""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from docoverlay.domain.entities.document import Document
from docoverlay.domain.exceptions import DocumentNotFound

DocumentListener = Callable[[Document], None]
DocumentChange = Callable[[Document], Optional[Document]]


class DocumentRepository(ABC):
    """Abstract repository for Document snapshots.

    Saving replaces the stored snapshot as a whole; readers always see either
    the previous or the new snapshot, never a mix.
    """

    @abstractmethod
    def save(self, document: Document) -> None:
        """Store ``document``, replacing any snapshot with the same id."""

    @abstractmethod
    def update(self, document_id: str, change: DocumentChange) -> Optional[Document]:
        """Atomically replace the stored snapshot with ``change(current)``.

        Nothing is stored when the document does not exist or ``change``
        returns ``None``. Returns the snapshot stored afterwards, or ``None``
        if the document does not exist.
        """

    @abstractmethod
    def find_by_id(self, document_id: str) -> Optional[Document]:
        """Return the document with the provided identifier, if it exists."""

    @abstractmethod
    def find_all(self) -> List[Document]:
        """Return all documents, newest upload first."""

    @abstractmethod
    def delete(self, document_id: str) -> bool:
        """Delete the document; return True if removed."""

    @abstractmethod
    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        """Register ``listener`` for saved snapshots; returns an unsubscribe callable."""

    def get(self, document_id: str) -> Document:
        """Return the document or raise :class:`DocumentNotFound`."""
        document = self.find_by_id(document_id)
        if document is None:
            raise DocumentNotFound(document_id)
        return document
