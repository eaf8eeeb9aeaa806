"""PDF rendering utilities for the infrastructure layer."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import fitz  # type: ignore

from docoverlay.domain.exceptions import InvalidDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderSize:
    """Pixel size of a page rendered at some scale."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("render size must be positive")


class PdfRenderer:
    """Render surface backed by PyMuPDF.

    Page numbers are 1-based. Sizes are in PDF points multiplied by ``scale``,
    which is also the pixel size of :meth:`render_png` output.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def page_count(self, pdf_bytes: bytes) -> int:
        """Return the number of pages in the PDF."""

        with self._open(pdf_bytes) as document:
            return document.page_count

    def page_size(self, pdf_bytes: bytes, page_number: int, scale: float = 1.0) -> RenderSize:
        """Return the rendered size of ``page_number`` at ``scale``."""

        self._check_scale(scale)
        with self._open(pdf_bytes) as document:
            page = self._load_page(document, page_number)
            rect = page.rect
            return RenderSize(width=rect.width * scale, height=rect.height * scale)

    def render_png(self, pdf_bytes: bytes, page_number: int, scale: float = 1.0) -> bytes:
        """Rasterize ``page_number`` at ``scale`` and return PNG bytes."""

        self._check_scale(scale)
        with self._open(pdf_bytes) as document:
            page = self._load_page(document, page_number)
            pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
            data = pixmap.tobytes("png")

        logger.debug("Rendered page %s at scale %.2f (%s bytes)", page_number, scale, len(data))
        return data

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _open(pdf_bytes: bytes) -> "fitz.Document":
        try:
            return fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as exc:
            raise InvalidDocument("File could not be opened as a PDF", original_error=exc) from exc

    @staticmethod
    def _load_page(document: "fitz.Document", page_number: int) -> "fitz.Page":
        if page_number < 1 or page_number > document.page_count:
            raise ValueError(
                f"Page {page_number} is out of range (document has {document.page_count} pages)"
            )
        return document.load_page(page_number - 1)

    @staticmethod
    def _check_scale(scale: float) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")
