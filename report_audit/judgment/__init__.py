from report_audit.judgment.base import BaseJudge
from report_audit.judgment.factory import JudgeFactory
from report_audit.judgment.judge import Judge

__all__ = ["BaseJudge", "Judge", "JudgeFactory"]
