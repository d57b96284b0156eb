from pathlib import Path

import pytest

from report_audit.rules.exceptions import RuleImportValidationError
from report_audit.rules.importer import parse_rule_rows, parse_rules_file
from report_audit.rules.models import RuleCategory, RuleDraft
from report_audit.rules.registry import RuleRegistry

HEADER = ("规则类型", "规则内容")


class TestParseRuleRows:
    def test_builds_drafts_in_order(self) -> None:
        drafts = parse_rule_rows([
            HEADER,
            ("文本编辑", "标题必须居中"),
            ("流转逻辑", "审核日期晚于编制日期"),
        ])
        assert drafts == [
            RuleDraft("标题必须居中", RuleCategory.TEXT_EDITING),
            RuleDraft("审核日期晚于编制日期", RuleCategory.WORKFLOW_LOGIC),
        ]

    def test_unknown_type_label_maps_to_special_rules(self) -> None:
        [draft] = parse_rule_rows([HEADER, ("排版", "页码连续")])
        assert draft.category is RuleCategory.SPECIAL_RULES

    def test_rows_missing_a_cell_are_skipped(self) -> None:
        drafts = parse_rule_rows([
            HEADER,
            ("文本编辑", None),
            (None, "孤立内容"),
            ("结果判定",),
            ("结果判定", " 数值为正 "),
        ])
        assert drafts == [RuleDraft("数值为正", RuleCategory.RESULT_DETERMINATION)]

    def test_blank_rows_are_ignored(self) -> None:
        drafts = parse_rule_rows([(None, None), HEADER, ("", ""), ("文本编辑", "x")])
        assert len(drafts) == 1

    def test_wrong_header_is_rejected(self) -> None:
        with pytest.raises(RuleImportValidationError, match="Invalid header"):
            parse_rule_rows([("type", "content"), ("文本编辑", "x")])

    def test_header_only_is_rejected(self) -> None:
        with pytest.raises(RuleImportValidationError, match="no data rows"):
            parse_rule_rows([HEADER])

    def test_empty_table_is_rejected(self) -> None:
        with pytest.raises(RuleImportValidationError, match="empty"):
            parse_rule_rows([])

    def test_no_valid_rows_is_rejected(self) -> None:
        with pytest.raises(RuleImportValidationError, match="No valid rule rows"):
            parse_rule_rows([HEADER, ("文本编辑", ""), ("", "内容")])


class TestParseRulesFile:
    def test_reads_csv_with_bom(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.csv"
        path.write_text("\ufeff规则类型,规则内容\n特殊规则,\"含逗号, 的规则\"\n", encoding="utf-8")
        assert parse_rules_file(path) == [
            RuleDraft("含逗号, 的规则", RuleCategory.SPECIAL_RULES)
        ]

    def test_rejects_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.txt"
        path.write_text("x", encoding="utf-8")
        with pytest.raises(RuleImportValidationError, match="Unsupported rule file type"):
            parse_rules_file(path)

    def test_rejects_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(RuleImportValidationError, match="Failed to read"):
            parse_rules_file(tmp_path / "missing.csv")

    def test_rejects_corrupt_workbook(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.xlsx"
        path.write_bytes(b"not a zip")
        with pytest.raises(RuleImportValidationError, match="Failed to parse workbook"):
            parse_rules_file(path)

    def test_rejected_file_leaves_registry_untouched(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.csv"
        path.write_text("type,content\n文本编辑,x\n", encoding="utf-8")
        registry = RuleRegistry.with_defaults()
        before = registry.all()

        with pytest.raises(RuleImportValidationError):
            registry.import_batch(parse_rules_file(path))

        assert registry.all() == before
