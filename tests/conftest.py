import io

import pytest
from docx import Document
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

_LONG_LINE = "Quarterly revenue grew across every enterprise region this year"


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def scanned_pdf_bytes() -> bytes:
    """Generate a three-page PDF with no text layer, like a scan."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(200, 200))
    for _ in range(3):
        c.rect(20, 20, 160, 160, fill=1)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def text_rich_pdf_bytes() -> bytes:
    """Generate a three-page PDF with well over 50 characters per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for page in range(1, 4):
        c.drawString(72, 720, f"Page {page}: {_LONG_LINE}")
        c.drawString(72, 700, _LONG_LINE)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """Generate a small RGB PNG with a dark block on a light background."""
    image = Image.new("RGB", (8, 6), color=(230, 230, 230))
    for x in range(2, 5):
        for y in range(1, 4):
            image.putpixel((x, y), (20, 20, 20))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def docx_bytes() -> bytes:
    """Generate a .docx container with two paragraphs."""
    document = Document()
    document.add_paragraph("Executive summary")
    document.add_paragraph("Budget approved for Q3")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
