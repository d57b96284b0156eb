from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from report_audit.rules.models import RuleCategory


class AuditStatus(str, Enum):
    """Overall outcome of one judgment."""

    PASS = "PASS"
    FAIL = "FAIL"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return SEVERITY_LABELS[self]


STATUS_LABELS: dict[AuditStatus, str] = {
    AuditStatus.PASS: "通过",
    AuditStatus.FAIL: "不通过",
    AuditStatus.WARNING: "警告",
    AuditStatus.ERROR: "错误",
}

SEVERITY_LABELS: dict[Severity, str] = {
    Severity.HIGH: "高",
    Severity.MEDIUM: "中",
    Severity.LOW: "低",
}


@dataclass(frozen=True)
class Issue:
    """A single rule violation found in a report."""

    category: RuleCategory
    rule: str
    description: str
    severity: Severity
    location: str | None = None


@dataclass(frozen=True)
class AuditResult:
    """Verdict produced by one judgment call."""

    status: AuditStatus
    summary: str
    issues: tuple[Issue, ...] = ()
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_issues(self) -> bool:
        return len(self.issues) > 0


def error_verdict(rule: str, message: str) -> AuditResult:
    """Build the ERROR verdict recorded when a document could not be judged.

    The verdict always carries exactly one high-severity special-rules issue
    so the failure shows up alongside regular findings.
    """
    return AuditResult(
        status=AuditStatus.ERROR,
        summary=message,
        issues=(
            Issue(
                category=RuleCategory.SPECIAL_RULES,
                rule=rule,
                description=message,
                severity=Severity.HIGH,
                location=None,
            ),
        ),
    )
