import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from report_audit.audit.models import AuditResult, AuditStatus, Severity
from report_audit.documents.models import Document, DocumentSource
from report_audit.extraction.exceptions import ExtractionError
from report_audit.judgment.exceptions import (
    JudgmentNetworkError,
    JudgmentResponseError,
    JudgmentTimeoutError,
)
from report_audit.rules.models import RuleCategory
from report_audit.rules.registry import RuleRegistry
from report_audit.worker.context import AuditContext
from report_audit.worker.document_runner import DocumentRunner


def _make_runner() -> tuple[DocumentRunner, AuditContext, MagicMock, AsyncMock, Document]:
    """Create a DocumentRunner with mocked extractor and judge."""
    rules = RuleRegistry()
    rules.add("rule one", RuleCategory.TEXT_EDITING)
    context = AuditContext(rules=rules)
    source = DocumentSource(path=Path("/reports/a.docx"), name="a.docx", size_bytes=5)
    [document] = context.documents.upsert([source], lambda _name: True)
    context.documents.mark_processing([document.id])
    mock_extractor = MagicMock()
    mock_extractor.extract.return_value = "<p>content</p>"
    mock_judge = AsyncMock()
    mock_judge.judge.return_value = AuditResult(status=AuditStatus.PASS, summary="ok")
    runner = DocumentRunner(context, mock_extractor, mock_judge)
    return runner, context, mock_extractor, mock_judge, context.documents.unprocessed()[0]


class TestSuccessfulAudit:
    def test_extracts_then_judges_with_active_rules(self) -> None:
        runner, _context, mock_extractor, mock_judge, document = _make_runner()

        asyncio.run(runner.run(document))

        mock_extractor.extract.assert_called_once_with(document.source)
        mock_judge.judge.assert_awaited_once_with("<p>content</p>", ["rule one"])

    def test_records_verdict_and_content(self) -> None:
        runner, context, _extractor, _judge, document = _make_runner()

        verdict = asyncio.run(runner.run(document))

        stored = context.documents.get(document.id)
        assert stored is not None
        assert stored.verdict is verdict
        assert stored.content == "<p>content</p>"
        assert stored.processing is False

    def test_skips_extraction_when_content_is_cached(self) -> None:
        runner, _context, mock_extractor, mock_judge, document = _make_runner()
        document.content = "<p>cached</p>"

        asyncio.run(runner.run(document))

        mock_extractor.extract.assert_not_called()
        mock_judge.judge.assert_awaited_once_with("<p>cached</p>", ["rule one"])


class TestFailures:
    def test_extraction_error_becomes_error_verdict(self) -> None:
        runner, context, mock_extractor, mock_judge, document = _make_runner()
        mock_extractor.extract.side_effect = ExtractionError("corrupt zip")

        verdict = asyncio.run(runner.run(document))

        mock_judge.judge.assert_not_awaited()
        assert verdict.status is AuditStatus.ERROR
        assert "corrupt zip" in verdict.summary
        stored = context.documents.get(document.id)
        assert stored is not None
        assert stored.content is None
        assert stored.verdict is verdict
        assert stored.processing is False

    def test_timeout_has_distinct_summary(self) -> None:
        runner, _context, _extractor, mock_judge, document = _make_runner()
        mock_judge.judge.side_effect = JudgmentTimeoutError("after 30s")

        verdict = asyncio.run(runner.run(document))

        assert verdict.status is AuditStatus.ERROR
        assert verdict.summary.startswith("Audit request timed out")
        assert verdict.issues[0].rule == "Judgment service timeout"

    def test_service_error_keeps_extracted_content(self) -> None:
        runner, context, _extractor, mock_judge, document = _make_runner()
        mock_judge.judge.side_effect = JudgmentNetworkError("API error [502]")

        verdict = asyncio.run(runner.run(document))

        assert verdict.summary.startswith("Audit service call failed")
        assert "502" in verdict.summary
        assert context.documents.get(document.id).content == "<p>content</p>"  # type: ignore[union-attr]

    def test_error_verdict_has_single_high_special_rules_issue(self) -> None:
        runner, _context, _extractor, mock_judge, document = _make_runner()
        mock_judge.judge.side_effect = JudgmentResponseError("Invalid JSON response")

        verdict = asyncio.run(runner.run(document))

        assert len(verdict.issues) == 1
        issue = verdict.issues[0]
        assert issue.category is RuleCategory.SPECIAL_RULES
        assert issue.severity is Severity.HIGH
        assert "Invalid JSON" in issue.description

    def test_unexpected_exception_is_contained(self) -> None:
        runner, _context, _extractor, mock_judge, document = _make_runner()
        mock_judge.judge.side_effect = RuntimeError("boom")

        with patch("report_audit.worker.document_runner.Log") as mock_log:
            verdict = asyncio.run(runner.run(document))

        assert verdict.status is AuditStatus.ERROR
        assert "boom" in verdict.summary
        mock_log.exception.assert_called_once()

    def test_error_verdict_flags_document_for_expansion(self) -> None:
        runner, context, mock_extractor, _judge, document = _make_runner()
        mock_extractor.extract.side_effect = ExtractionError("bad")

        asyncio.run(runner.run(document))

        assert document.id in context.expanded
