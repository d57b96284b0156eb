import asyncio
from collections import Counter, deque
from dataclasses import dataclass, field

from report_audit.audit.models import AuditResult, AuditStatus
from report_audit.config.settings import Settings
from report_audit.documents.models import Document
from report_audit.extraction.factory import ContentExtractor, ContentExtractorFactory
from report_audit.judgment.factory import JudgeFactory
from report_audit.logging.logger import Log
from report_audit.worker.context import AuditContext
from report_audit.worker.document_runner import DocumentRunner

DEFAULT_CONCURRENCY = 3


@dataclass
class BatchReport:
    """Outcome of one batch run, in completion order."""

    verdicts: dict[str, AuditResult] = field(default_factory=dict)

    @property
    def processed_ids(self) -> list[str]:
        return list(self.verdicts)

    @property
    def status_counts(self) -> Counter[AuditStatus]:
        return Counter(verdict.status for verdict in self.verdicts.values())


class BatchRunner:
    """Drain all unprocessed documents with a fixed number of async workers.

    Workers share one queue; each document is taken by exactly one worker
    and at most ``concurrency`` documents are being audited at any time.
    A failing document only affects its own verdict.
    """

    def __init__(
        self,
        context: AuditContext,
        document_runner: DocumentRunner,
        concurrency: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self._context = context
        self._document_runner = document_runner
        self._concurrency = concurrency

    async def run(self) -> BatchReport:
        """Audit every document that has no verdict yet."""
        report = BatchReport()
        snapshot = self._context.documents.unprocessed()
        marked = set(self._context.documents.mark_processing(d.id for d in snapshot))
        queue = deque(d for d in snapshot if d.id in marked)
        if not queue:
            Log.info("No unprocessed documents, nothing to audit")
            return report

        worker_count = min(self._concurrency, len(queue))
        Log.info(f"Batch started: {len(queue)} documents, {worker_count} workers")
        await asyncio.gather(*(self._drain(queue, report) for _ in range(worker_count)))

        counts = ", ".join(
            f"{status.value}={count}" for status, count in sorted(report.status_counts.items())
        )
        Log.info(f"Batch finished: {len(report.verdicts)} documents ({counts})")
        return report

    async def _drain(self, queue: deque[Document], report: BatchReport) -> None:
        while queue:
            document = queue.popleft()
            report.verdicts[document.id] = await self._document_runner.run(document)


def build_batch_runner(
    context: AuditContext,
    settings: Settings,
    extractor: ContentExtractor | None = None,
) -> BatchRunner:
    """Build a BatchRunner with the configured extractor and judge."""
    if extractor is None:
        extractor = ContentExtractorFactory.create(settings)
    judge = JudgeFactory.create(settings)
    document_runner = DocumentRunner(context, extractor, judge)
    return BatchRunner(context, document_runner, settings.batch_concurrency)
