class ExtractionError(Exception):
    """Raised when a report cannot be turned into auditable content."""


class UnsupportedDocumentTypeError(ExtractionError):
    """Raised when no extractor is registered for a file extension."""
