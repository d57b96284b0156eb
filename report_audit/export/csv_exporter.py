import csv
import io
import time
from pathlib import Path, PurePath

from report_audit.audit.models import AuditResult
from report_audit.logging.logger import Log

CSV_HEADER: tuple[str, ...] = (
    "文件名",
    "审批状态",
    "执行摘要",
    "错误分类",
    "规则名称",
    "详细描述",
    "严重程度",
    "位置",
)

# Lets spreadsheet tools detect UTF-8.
_BOM = "\ufeff"


def verdict_rows(document_name: str, verdict: AuditResult) -> list[list[str]]:
    """One row per issue, or a single row with empty issue columns."""
    common = [document_name, verdict.status.label, verdict.summary]
    if not verdict.issues:
        return [common + ["", "", "", "", ""]]
    return [
        common
        + [
            issue.category.label,
            issue.rule,
            issue.description,
            issue.severity.label,
            issue.location or "",
        ]
        for issue in verdict.issues
    ]


def render_verdict_csv(document_name: str, verdict: AuditResult) -> str:
    """Render a verdict as CSV text with a header row.

    Fields holding a comma, quote or newline are quoted, embedded quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows(verdict_rows(document_name, verdict))
    return buffer.getvalue()


def export_filename(document_name: str, timestamp_ms: int | None = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"audit_report_{PurePath(document_name).stem}_{timestamp_ms}.csv"


def export_verdict_csv(document_name: str, verdict: AuditResult, directory: Path) -> Path:
    """Write a verdict CSV into *directory* and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(document_name)
    path.write_text(_BOM + render_verdict_csv(document_name, verdict), encoding="utf-8")
    Log.info(f"Exported verdict for '{document_name}' to {path}")
    return path
