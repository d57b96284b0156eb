"""Word (.docx) report extraction.

Reports are rendered to compact HTML-like markup rather than raw text so
that table structure (rows and cells) survives: many audit rules compare
values across columns of the same row. Images are dropped and whitespace is
collapsed to keep the content small for the judgment service.
"""

import html
import io
import re

import docx
from docx.document import Document as WordDocument
from docx.table import Table
from docx.text.paragraph import Paragraph

from report_audit.extraction.base import BaseContentExtractor
from report_audit.extraction.exceptions import ExtractionError

_WHITESPACE_RE = re.compile(r"\s+")
_HEADING_RE = re.compile(r"^Heading (\d)$")


class DocxHtmlAdapter(BaseContentExtractor):
    """Converts a Word report into whitespace-collapsed HTML markup."""

    def extract(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
            parts = self._render_headers(document)
            for block in document.iter_inner_content():
                if isinstance(block, Table):
                    parts.append(self._render_table(block))
                else:
                    parts.append(self._render_paragraph(block))
        except Exception as exc:
            raise ExtractionError(f"docx extraction failed: {exc}") from exc
        return _collapse("".join(parts))

    def _render_headers(self, document: WordDocument) -> list[str]:
        # Report ids usually live in the page header, not the body.
        seen: set[str] = set()
        parts: list[str] = []
        for section in document.sections:
            text = _collapse(" ".join(p.text for p in section.header.paragraphs))
            if text and text not in seen:
                seen.add(text)
                parts.append(f"<header>{html.escape(text)}</header>")
        return parts

    def _render_paragraph(self, paragraph: Paragraph) -> str:
        text = _collapse(paragraph.text)
        if not text:
            return ""
        tag = "p"
        style_name = paragraph.style.name if paragraph.style is not None else ""
        match = _HEADING_RE.match(style_name or "")
        if match:
            tag = f"h{match.group(1)}"
        return f"<{tag}>{html.escape(text)}</{tag}>"

    def _render_table(self, table: Table) -> str:
        rows: list[str] = []
        for row in table.rows:
            cells = "".join(
                f"<td>{html.escape(_collapse(cell.text))}</td>" for cell in row.cells
            )
            rows.append(f"<tr>{cells}</tr>")
        return f"<table>{''.join(rows)}</table>"


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
