from report_audit.documents.exceptions import DocumentNotFoundError
from report_audit.extraction.factory import ContentExtractor
from report_audit.logging.logger import Log
from report_audit.worker.context import AuditContext


def preview_content(context: AuditContext, extractor: ContentExtractor, document_id: str) -> str:
    """Return a document's content without judging it.

    Extraction happens at most once per document; the result is cached in the
    registry so a later batch run reuses it.

    Raises:
        DocumentNotFoundError: if the document is not registered.
        ExtractionError: if the report cannot be read.
    """
    document = context.documents.get(document_id)
    if document is None:
        raise DocumentNotFoundError(f"Document {document_id} not found")
    if document.content is not None:
        return document.content
    content = extractor.extract(document.source)
    Log.info(f"Extracted {len(content)} chars from '{document.name}' for preview")
    return context.documents.cache_content(document_id, content)
