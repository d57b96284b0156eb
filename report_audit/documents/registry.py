import uuid
from collections.abc import Callable, Iterable
from dataclasses import replace

from report_audit.audit.models import AuditResult
from report_audit.documents.exceptions import DocumentNotFoundError
from report_audit.documents.models import Document, DocumentSource
from report_audit.logging.logger import Log

ConfirmOverwrite = Callable[[str], bool]


class DocumentRegistry:
    """In-memory store of uploaded reports and the single writer of their state.

    Documents are keyed by id and kept in upload order. Reads return copies so
    callers cannot mutate registry state behind its back.
    """

    def __init__(self) -> None:
        self._documents: dict[str, Document] = {}

    def upsert(
        self,
        files: Iterable[DocumentSource],
        confirm_overwrite: ConfirmOverwrite,
    ) -> list[Document]:
        """Add uploaded files, replacing same-name documents when confirmed.

        Files sharing a name within one call are collapsed to the last one.
        A replaced document loses its content and verdict: the new entry gets
        a fresh id and starts unprocessed.
        """
        by_name: dict[str, DocumentSource] = {}
        for source in files:
            by_name.pop(source.name, None)
            by_name[source.name] = source

        inserted: list[Document] = []
        for name, source in by_name.items():
            existing = self._find_by_name(name)
            if existing is not None:
                if not confirm_overwrite(name):
                    Log.info(f"Kept existing document '{name}'")
                    continue
                del self._documents[existing.id]
                Log.info(f"Replacing document '{name}' ({existing.id})")
            document = Document(id=uuid.uuid4().hex, source=source)
            self._documents[document.id] = document
            inserted.append(replace(document))
        return inserted

    def remove(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

    def mark_processing(self, document_ids: Iterable[str]) -> list[str]:
        """Flag unjudged, idle documents as in flight.

        Returns the ids that were actually transitioned; documents that are
        missing, already judged or already processing are left alone.
        """
        marked: list[str] = []
        for document_id in document_ids:
            document = self._documents.get(document_id)
            if document is None or document.verdict is not None or document.processing:
                continue
            document.processing = True
            marked.append(document_id)
        return marked

    def complete(
        self,
        document_id: str,
        content: str | None,
        verdict: AuditResult,
    ) -> bool:
        """Record a verdict and clear the processing flag.

        Content is only stored if the document has none yet. Returns False if
        the document was removed while its judgment was in flight.
        """
        document = self._documents.get(document_id)
        if document is None:
            Log.warning(f"Discarding verdict for removed document {document_id}")
            return False
        if document.content is None and content is not None:
            document.content = content
        document.verdict = verdict
        document.processing = False
        return True

    def cache_content(self, document_id: str, content: str) -> str:
        """Store extracted content unless the document already has some.

        Returns the content now held by the document.

        Raises:
            DocumentNotFoundError: if the document is not registered.
        """
        document = self._documents.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        if document.content is None:
            document.content = content
        return document.content

    def unprocessed(self) -> list[Document]:
        return [replace(d) for d in self._documents.values() if d.verdict is None]

    def get(self, document_id: str) -> Document | None:
        document = self._documents.get(document_id)
        return replace(document) if document is not None else None

    def all(self) -> list[Document]:
        return [replace(d) for d in self._documents.values()]

    def find_by_name(self, name: str) -> Document | None:
        document = self._find_by_name(name)
        return replace(document) if document is not None else None

    def __len__(self) -> int:
        return len(self._documents)

    def _find_by_name(self, name: str) -> Document | None:
        for document in self._documents.values():
            if document.name == name:
                return document
        return None
