"""Rule workbook import/export.

Rule files are two-column tables whose first row is the header
``规则类型 | 规则内容`` (rule type, rule content). ``.xlsx`` workbooks are read
with openpyxl (first sheet only); ``.csv`` files with the csv module.
"""

import csv
import io
from collections.abc import Iterable, Sequence
from pathlib import Path

import openpyxl

from report_audit.logging.logger import Log
from report_audit.rules.exceptions import RuleImportValidationError
from report_audit.rules.models import Rule, RuleCategory, RuleDraft

RULE_FILE_HEADER: tuple[str, str] = ("规则类型", "规则内容")
EXPORT_SHEET_TITLE = "当前审批规则"
TEMPLATE_SHEET_TITLE = "规则模板"

TEMPLATE_EXAMPLES: tuple[tuple[str, str], ...] = (
    ("文本编辑", "报告编号必须出现在页眉处"),
    ("结果判定", "检测结果数值不能为负数"),
    ("流转逻辑", "报告日期必须晚于检测结束日期"),
)

_SUPPORTED_SUFFIXES = frozenset({".xlsx", ".csv"})

Row = Sequence[object]


def parse_rules_file(path: Path) -> list[RuleDraft]:
    """Read and validate a rule file.

    Raises:
        RuleImportValidationError: if the file cannot be read, the header is
            wrong, it has no data rows, or no row holds both a type and content.
    """
    suffix = path.suffix.lower()
    if suffix not in _SUPPORTED_SUFFIXES:
        raise RuleImportValidationError(
            f"Unsupported rule file type '{suffix}'. Choose from: {sorted(_SUPPORTED_SUFFIXES)}"
        )
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise RuleImportValidationError(f"Failed to read rule file: {exc}") from exc

    rows = _read_xlsx_rows(data) if suffix == ".xlsx" else _read_csv_rows(data)
    drafts = parse_rule_rows(rows)
    Log.info(f"Parsed {len(drafts)} rules from {path.name}")
    return drafts


def parse_rule_rows(rows: Iterable[Row]) -> list[RuleDraft]:
    """Validate raw table rows (header first) and build rule drafts."""
    table = [row for row in rows if any(_cell(value) for value in row)]
    if len(table) < 2:
        raise RuleImportValidationError("Rule file is empty or has no data rows")

    header = table[0]
    if len(header) < 2 or (_cell(header[0]), _cell(header[1])) != RULE_FILE_HEADER:
        raise RuleImportValidationError(
            f"Invalid header: first row must contain '{RULE_FILE_HEADER[0]}' "
            f"and '{RULE_FILE_HEADER[1]}'"
        )

    drafts: list[RuleDraft] = []
    for row in table[1:]:
        if len(row) < 2:
            continue
        type_label = _cell(row[0])
        text = _cell(row[1])
        if type_label and text:
            drafts.append(RuleDraft(text=text, category=RuleCategory.from_label(type_label)))

    if not drafts:
        raise RuleImportValidationError("No valid rule rows found in file")
    return drafts


def export_rules_to_xlsx(rules: Iterable[Rule], path: Path) -> None:
    """Write rules to a workbook in the import layout."""
    rows = [(rule.category.label, rule.text) for rule in rules]
    _write_workbook(path, EXPORT_SHEET_TITLE, rows)
    Log.info(f"Exported {len(rows)} rules to {path}")


def write_rule_template(path: Path) -> None:
    """Write an import template with a few example rows."""
    _write_workbook(path, TEMPLATE_SHEET_TITLE, list(TEMPLATE_EXAMPLES))


def _write_workbook(path: Path, title: str, rows: list[tuple[str, str]]) -> None:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = title
    sheet.append(list(RULE_FILE_HEADER))
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)


def _read_xlsx_rows(data: bytes) -> list[Row]:
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:
        raise RuleImportValidationError(f"Failed to parse workbook: {exc}") from exc
    try:
        sheet = workbook.worksheets[0]
        return [tuple(row) for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_csv_rows(data: bytes) -> list[Row]:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise RuleImportValidationError(f"Rule file is not valid UTF-8: {exc}") from exc
    return [tuple(row) for row in csv.reader(io.StringIO(text))]


def _cell(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()
