"""Repository interfaces for the domain layer."""

from .document_repository import DocumentRepository

__all__ = ["DocumentRepository"]
