from dataclasses import dataclass
from pathlib import Path

from report_audit.audit.models import AuditResult


@dataclass(frozen=True)
class DocumentSource:
    """Handle to an uploaded report on disk."""

    path: Path
    name: str
    size_bytes: int

    @classmethod
    def from_path(cls, path: Path) -> "DocumentSource":
        return cls(path=path, name=path.name, size_bytes=path.stat().st_size)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass
class Document:
    """A tracked report and its audit lifecycle state.

    Owned by DocumentRegistry; everything handed out of the registry is a copy.
    """

    id: str
    source: DocumentSource
    content: str | None = None
    processing: bool = False
    verdict: AuditResult | None = None

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def size_bytes(self) -> int:
        return self.source.size_bytes
