from pathlib import PurePath

from report_audit.config.settings import Settings
from report_audit.documents.models import DocumentSource
from report_audit.extraction.base import BaseContentExtractor
from report_audit.extraction.docx_adapter import DocxHtmlAdapter
from report_audit.extraction.exceptions import ExtractionError, UnsupportedDocumentTypeError
from report_audit.extraction.pdfplumber_adapter import PdfPlumberAdapter


class ContentExtractor:
    """Routes each report to the adapter registered for its file extension."""

    def __init__(self, adapters: dict[str, BaseContentExtractor]) -> None:
        self._adapters = {suffix.lower(): adapter for suffix, adapter in adapters.items()}

    @property
    def supported_suffixes(self) -> list[str]:
        return sorted(self._adapters)

    def supports(self, name: str) -> bool:
        return PurePath(name).suffix.lower() in self._adapters

    def extract(self, source: DocumentSource) -> str:
        """Read the report from disk and convert it to content.

        Raises:
            ExtractionError: if the type is unsupported, the file cannot be
                read, or the adapter fails.
        """
        suffix = PurePath(source.name).suffix.lower()
        adapter = self._adapters.get(suffix)
        if adapter is None:
            raise UnsupportedDocumentTypeError(
                f"Unsupported document type '{suffix or source.name}'. "
                f"Choose from: {self.supported_suffixes}"
            )
        try:
            data = source.read_bytes()
        except OSError as exc:
            raise ExtractionError(f"Failed to read {source.name}: {exc}") from exc
        return adapter.extract(data)


class ContentExtractorFactory:
    """Creates the extractor set based on settings."""

    PDF_ENGINES: dict[str, type[BaseContentExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> ContentExtractor:
        engine = settings.pdf_engine.lower()
        pdf_adapter_cls = cls.PDF_ENGINES.get(engine)
        if pdf_adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return ContentExtractor(
            {
                ".docx": DocxHtmlAdapter(),
                ".pdf": pdf_adapter_cls(),
            }
        )
