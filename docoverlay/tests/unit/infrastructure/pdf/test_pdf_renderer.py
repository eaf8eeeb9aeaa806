import fitz
import pytest

from docoverlay.domain.exceptions import InvalidDocument
from docoverlay.infrastructure.pdf.pdf_renderer import PdfRenderer, RenderSize

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def pdf_bytes() -> bytes:
    document = fitz.open()
    document.new_page(width=612, height=792)
    document.new_page(width=300, height=200)
    data = document.tobytes()
    document.close()
    return data


def test_page_count(pdf_bytes):
    assert PdfRenderer().page_count(pdf_bytes) == 2


def test_page_size_applies_scale(pdf_bytes):
    renderer = PdfRenderer()
    assert renderer.page_size(pdf_bytes, 1) == RenderSize(width=612, height=792)
    size = renderer.page_size(pdf_bytes, 2, scale=2.0)
    assert size.width == pytest.approx(600)
    assert size.height == pytest.approx(400)


def test_render_png(pdf_bytes):
    data = PdfRenderer().render_png(pdf_bytes, 2, scale=0.5)
    assert data.startswith(PNG_SIGNATURE)


@pytest.mark.parametrize("page_number", [0, 3])
def test_page_out_of_range(pdf_bytes, page_number):
    with pytest.raises(ValueError):
        PdfRenderer().page_size(pdf_bytes, page_number)


def test_scale_must_be_positive(pdf_bytes):
    with pytest.raises(ValueError):
        PdfRenderer().render_png(pdf_bytes, 1, scale=0)


def test_not_a_pdf():
    with pytest.raises(InvalidDocument):
        PdfRenderer().page_count(b"definitely not a pdf")


def test_render_size_must_be_positive():
    with pytest.raises(ValueError):
        RenderSize(width=0, height=10)
