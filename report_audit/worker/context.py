from dataclasses import dataclass, field

from report_audit.documents.registry import DocumentRegistry
from report_audit.rules.registry import RuleRegistry


@dataclass
class AuditContext:
    """Session state shared by the batch runner and the front end."""

    documents: DocumentRegistry = field(default_factory=DocumentRegistry)
    rules: RuleRegistry = field(default_factory=RuleRegistry.with_defaults)
    # Ids of documents whose findings should be shown expanded.
    expanded: set[str] = field(default_factory=set)

    def remove_document(self, document_id: str) -> None:
        self.documents.remove(document_id)
        self.expanded.discard(document_id)
