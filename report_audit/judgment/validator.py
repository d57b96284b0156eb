"""Coerces a parsed judgment reply into an AuditResult.

Replies come from a language model, so nothing about their shape is
trusted. Unknown values are mapped to the most cautious reading instead of
being rejected.
"""

from typing import Any

from report_audit.audit.models import AuditResult, AuditStatus, Issue, Severity
from report_audit.rules.models import RuleCategory

DEFAULT_SUMMARY = "No audit summary was returned"

_FALLBACK_STATUS = AuditStatus.FAIL
# ERROR is reserved for failures detected locally.
_REPLY_STATUSES = frozenset({AuditStatus.PASS, AuditStatus.FAIL, AuditStatus.WARNING})
_FALLBACK_SEVERITY = Severity.HIGH


def build_audit_result(data: dict[str, Any]) -> AuditResult:
    status = coerce_status(data.get("overallStatus", data.get("status")))
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = DEFAULT_SUMMARY
    return AuditResult(
        status=status,
        summary=summary.strip(),
        issues=_build_issues(data.get("issues")),
    )


def coerce_status(raw: Any) -> AuditStatus:
    """Map a reply status to PASS, FAIL or WARNING; anything else is a FAIL."""
    if isinstance(raw, str):
        try:
            status = AuditStatus(raw.strip().upper())
        except ValueError:
            return _FALLBACK_STATUS
        if status in _REPLY_STATUSES:
            return status
    return _FALLBACK_STATUS


def coerce_severity(raw: Any) -> Severity:
    if isinstance(raw, str):
        try:
            return Severity(raw.strip().lower())
        except ValueError:
            pass
    return _FALLBACK_SEVERITY


def _build_issues(raw: Any) -> tuple[Issue, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(_build_issue(item) for item in raw if isinstance(item, dict))


def _build_issue(raw: dict[str, Any]) -> Issue:
    location = raw.get("location")
    return Issue(
        category=RuleCategory.coerce(raw.get("category")),
        rule=_text(raw.get("rule")),
        description=_text(raw.get("description")),
        severity=coerce_severity(raw.get("severity")),
        location=_text(location) if location is not None else None,
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
