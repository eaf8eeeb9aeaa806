"""Command handler for registering uploaded PDFs."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from docoverlay.constants import (
    DEFAULT_MODEL_ID,
    MAX_FILENAME_LENGTH,
    MAX_UPLOAD_BYTES,
    MIN_UPLOAD_BYTES,
    PDF_MAGIC,
)
from docoverlay.domain.entities.document import Document, DocumentType
from docoverlay.domain.exceptions import ErrorCode, InvalidDocument
from docoverlay.domain.repositories.document_repository import DocumentRepository

logger = logging.getLogger(__name__)

_DANGEROUS_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def format_file_size(size: int) -> str:
    """
    Examples:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    index = 0
    while value >= 1024 and index < len(units) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {units[index]}"


def validate_upload(
    filename: str,
    content: bytes,
    *,
    min_bytes: int = MIN_UPLOAD_BYTES,
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    """
    Reject anything that is not a reasonably sized PDF with a safe name.

    Raises:
        InvalidDocument: With code ``FILE_TOO_LARGE`` for oversized files and
            ``INVALID_FILE`` for every other problem
    """
    name = (filename or "").strip()
    if not name:
        raise InvalidDocument("File name is required.")
    if len(name) > MAX_FILENAME_LENGTH:
        raise InvalidDocument(
            f"File name is too long. Maximum length is {MAX_FILENAME_LENGTH} characters."
        )
    if _DANGEROUS_CHARACTERS.search(name):
        raise InvalidDocument("File name contains invalid characters.", context={"filename": name})
    if PurePath(name).suffix.lower() != ".pdf":
        raise InvalidDocument("Only PDF files are allowed.", context={"filename": name})

    size = len(content)
    if size > max_bytes:
        raise InvalidDocument(
            f"File size {format_file_size(size)} exceeds maximum allowed size of {format_file_size(max_bytes)}.",
            code=ErrorCode.FILE_TOO_LARGE,
            context={"size": size},
        )
    if size < min_bytes:
        raise InvalidDocument(
            f"File size {format_file_size(size)} is too small. Minimum size is {format_file_size(min_bytes)}.",
            context={"size": size},
        )
    if not content.startswith(PDF_MAGIC):
        raise InvalidDocument("File content is not a PDF document.", context={"filename": name})


@dataclass(frozen=True)
class UploadDocumentCommand:
    """Command describing an uploaded document ready to be stored."""

    filename: str
    content: bytes
    model_id: Optional[str] = None


class UploadDocumentHandler:
    """Validates the upload and stores a new Document."""

    def __init__(
        self,
        repository: DocumentRepository,
        *,
        min_bytes: int = MIN_UPLOAD_BYTES,
        max_bytes: int = MAX_UPLOAD_BYTES,
        default_model_id: str = DEFAULT_MODEL_ID,
    ):
        self._documents = repository
        self._default_model_id = default_model_id
        self._min_bytes = min_bytes
        self._max_bytes = max_bytes

    def handle(self, command: UploadDocumentCommand) -> Document:
        validate_upload(
            command.filename,
            command.content,
            min_bytes=self._min_bytes,
            max_bytes=self._max_bytes,
        )
        filename = command.filename.strip()
        model_id = (command.model_id or "").strip() or None
        if model_id is None and DocumentType.detect(filename) == DocumentType.LAYOUT:
            model_id = self._default_model_id

        document = Document.create(filename, command.content, model_id=model_id)
        self._documents.save(document)
        logger.info(
            "Stored upload %s",
            document.filename,
            extra={"document_id": document.document_id, "model_id": document.model_id},
        )
        return document
