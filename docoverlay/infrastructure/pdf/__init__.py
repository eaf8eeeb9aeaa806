"""PDF infrastructure utilities."""

from .pdf_renderer import PdfRenderer, RenderSize

__all__ = ["PdfRenderer", "RenderSize"]
