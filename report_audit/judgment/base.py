from abc import ABC, abstractmethod
from collections.abc import Sequence

from report_audit.audit.models import AuditResult


class BaseJudge(ABC):
    """Contract for all judgment adapters."""

    @abstractmethod
    async def judge(self, content: str, rules: Sequence[str]) -> AuditResult:
        """Audit report content against an ordered list of rule texts.

        Args:
            content: Extracted report content.
            rules: Texts of the active rules, in the order they should be listed.

        Returns:
            AuditResult with a PASS, FAIL or WARNING status.

        Raises:
            ServiceError: on any failure, JudgmentTimeoutError on timeout.
        """
