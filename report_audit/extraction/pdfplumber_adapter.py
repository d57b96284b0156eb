import io

import pdfplumber

from report_audit.extraction.base import BaseContentExtractor
from report_audit.extraction.exceptions import ExtractionError


class PdfPlumberAdapter(BaseContentExtractor):
    """Extracts page text from PDF reports using pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return "\n".join(pages).strip()
