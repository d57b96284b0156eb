from dataclasses import dataclass
from enum import Enum


class RuleCategory(str, Enum):
    """Kind of check a rule performs."""

    TEXT_EDITING = "text_editing"
    WORKFLOW_LOGIC = "workflow_logic"
    RESULT_DETERMINATION = "result_determination"
    SPECIAL_RULES = "special_rules"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "RuleCategory":
        """Map a display label to a category; unknown labels fall back to special rules."""
        return _CATEGORIES_BY_LABEL.get(label.strip(), cls.SPECIAL_RULES)

    @classmethod
    def coerce(cls, value: object) -> "RuleCategory":
        """Map a raw value (code or label) to a category, defaulting to special rules."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return cls.from_label(value)
        return cls.SPECIAL_RULES


CATEGORY_LABELS: dict[RuleCategory, str] = {
    RuleCategory.TEXT_EDITING: "文本编辑",
    RuleCategory.WORKFLOW_LOGIC: "流转逻辑",
    RuleCategory.RESULT_DETERMINATION: "结果判定",
    RuleCategory.SPECIAL_RULES: "特殊规则",
}

_CATEGORIES_BY_LABEL: dict[str, RuleCategory] = {
    label: category for category, label in CATEGORY_LABELS.items()
}


@dataclass(frozen=True)
class Rule:
    """A single audit rule as held by the rule registry."""

    id: str
    text: str
    category: RuleCategory
    enabled: bool = True


@dataclass(frozen=True)
class RuleDraft:
    """A validated rule row that has not been assigned an id yet."""

    text: str
    category: RuleCategory


DEFAULT_RULES: tuple[RuleDraft, ...] = (
    RuleDraft("“收样日期”必须早于或等于“检测日期”。", RuleCategory.WORKFLOW_LOGIC),
    RuleDraft(
        "表格中的所有数值型“检测结果”必须符合“标准要求”或“技术指标”列中规定的范围。",
        RuleCategory.RESULT_DETERMINATION,
    ),
    RuleDraft("报告中必须包含明确的“结论”或“判定”章节。", RuleCategory.TEXT_EDITING),
    RuleDraft("报告编号（Report ID）必须出现在页眉或标题中。", RuleCategory.TEXT_EDITING),
)
