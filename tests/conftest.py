import io
from collections.abc import Callable
from pathlib import Path

import docx
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from report_audit.documents.models import DocumentSource


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Report No. R-2024-001")
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
def sample_docx_bytes() -> bytes:
    """Generate a Word report with a header, a heading, a paragraph and a table."""
    document = docx.Document()
    document.sections[0].header.paragraphs[0].text = "Report ID: R-2024-001"
    document.add_heading("Conclusion", level=1)
    document.add_paragraph("All   results are   within range.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Item"
    table.cell(0, 1).text = "Result"
    table.cell(1, 0).text = "pH"
    table.cell(1, 1).text = "7.1 <ok>"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def make_docx_file(tmp_path: Path) -> Callable[[str, str], DocumentSource]:
    """Write a one-paragraph .docx report to tmp_path and return its source."""

    def _make(name: str, text: str = "Sample report body") -> DocumentSource:
        document = docx.Document()
        document.add_paragraph(text)
        path = tmp_path / name
        document.save(path)
        return DocumentSource.from_path(path)

    return _make
