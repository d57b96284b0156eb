import asyncio

from report_audit.audit.models import AuditResult, error_verdict
from report_audit.documents.models import Document
from report_audit.extraction.exceptions import ExtractionError
from report_audit.extraction.factory import ContentExtractor
from report_audit.judgment.base import BaseJudge
from report_audit.judgment.exceptions import JudgmentTimeoutError, ServiceError
from report_audit.logging.logger import Log
from report_audit.worker.context import AuditContext


class DocumentRunner:
    """Audit one document, turning any failure into an ERROR verdict."""

    def __init__(
        self,
        context: AuditContext,
        extractor: ContentExtractor,
        judge: BaseJudge,
    ) -> None:
        self._context = context
        self._extractor = extractor
        self._judge = judge

    async def run(self, document: Document) -> AuditResult:
        """Extract (once), judge and record the verdict for a document."""
        Log.info(f"Auditing document '{document.name}' ({document.id})")
        content = document.content
        try:
            if content is None:
                content = await asyncio.to_thread(self._extractor.extract, document.source)
                Log.info(f"Extracted {len(content)} chars from '{document.name}'")
            # Rules are read after extraction so toggles made mid-batch apply.
            rules = self._context.rules.active_texts()
            verdict = await self._judge.judge(content, rules)
        except Exception as exc:
            verdict = self._handle_failure(document, exc)

        if self._context.documents.complete(document.id, content, verdict):
            if verdict.has_issues:
                self._context.expanded.add(document.id)
            Log.info(
                f"Document '{document.name}' judged {verdict.status.value} "
                f"with {len(verdict.issues)} issues"
            )
        return verdict

    def _handle_failure(self, document: Document, exc: Exception) -> AuditResult:
        if isinstance(exc, ExtractionError):
            Log.error(f"Extraction failed for '{document.name}': {exc}")
            return error_verdict("Document extraction failed", f"Could not read document: {exc}")
        if isinstance(exc, JudgmentTimeoutError):
            Log.error(f"Judgment timed out for '{document.name}': {exc}")
            return error_verdict("Judgment service timeout", f"Audit request timed out: {exc}")
        if isinstance(exc, ServiceError):
            Log.error(f"Judgment failed for '{document.name}': {exc}")
            return error_verdict("Judgment service failure", f"Audit service call failed: {exc}")
        Log.exception(f"Unexpected error while auditing '{document.name}'")
        return error_verdict("Unexpected processing error", f"Document processing failed: {exc}")
