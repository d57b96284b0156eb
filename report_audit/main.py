import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from report_audit.config.settings import Settings
from report_audit.documents.models import DocumentSource
from report_audit.export.csv_exporter import export_verdict_csv
from report_audit.extraction.exceptions import ExtractionError
from report_audit.extraction.factory import ContentExtractor, ContentExtractorFactory
from report_audit.logging.logger import Log
from report_audit.rules.exceptions import RuleImportValidationError
from report_audit.rules.importer import (
    export_rules_to_xlsx,
    parse_rules_file,
    write_rule_template,
)
from report_audit.rules.registry import RuleRegistry
from report_audit.worker.batch_runner import build_batch_runner
from report_audit.worker.context import AuditContext
from report_audit.worker.preview import preview_content


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="report-audit",
        description="Audit office-format reports against a configurable rule set.",
    )
    parser.add_argument("reports", nargs="*", type=Path, help="report files to audit")
    parser.add_argument("--rules", type=Path, help="import rules from an .xlsx or .csv file")
    parser.add_argument(
        "--no-default-rules",
        action="store_true",
        help="start from an empty rule set instead of the built-in rules",
    )
    parser.add_argument(
        "--disable",
        type=int,
        action="append",
        default=[],
        metavar="N",
        help="disable the N-th rule (1-based, repeatable)",
    )
    parser.add_argument("--export-dir", type=Path, help="write one CSV report per document here")
    parser.add_argument("--export-rules", type=Path, help="write the rule set to an .xlsx file")
    parser.add_argument("--rule-template", type=Path, help="write a rule import template")
    parser.add_argument(
        "--preview",
        metavar="NAME",
        action="append",
        default=[],
        help="print the extracted content of a document before auditing (repeatable)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="replace same-name documents without asking",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: load rules -> register reports -> run batch -> render/export."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    Log.configure(settings.log_level)

    rules = RuleRegistry() if args.no_default_rules else RuleRegistry.with_defaults()
    context = AuditContext(rules=rules)

    if args.rule_template:
        write_rule_template(args.rule_template)
        print(f"Rule template written to {args.rule_template}")
    if args.rules:
        try:
            imported = rules.import_batch(parse_rules_file(args.rules))
        except RuleImportValidationError as exc:
            print(f"Rule import rejected: {exc}", file=sys.stderr)
            return 2
        print(f"Imported {len(imported)} rules")
    _disable_rules(rules, args.disable)
    if args.export_rules:
        export_rules_to_xlsx(rules.all(), args.export_rules)

    extractor = ContentExtractorFactory.create(settings)
    sources = _collect_sources(args.reports, extractor)
    confirm = (lambda _name: True) if args.overwrite else _ask_overwrite
    context.documents.upsert(sources, confirm)
    if not len(context.documents):
        return 0
    for name in args.preview:
        _print_preview(context, extractor, name)

    runner = build_batch_runner(context, settings, extractor)
    asyncio.run(runner.run())

    _render(context)
    if args.export_dir:
        for document in context.documents.all():
            if document.verdict is not None:
                export_verdict_csv(document.name, document.verdict, args.export_dir)
    return 0


def _disable_rules(rules: RuleRegistry, positions: list[int]) -> None:
    current = rules.all()
    for position in positions:
        if not 1 <= position <= len(current):
            Log.warning(f"No rule at position {position}, ignoring --disable")
            continue
        rule = current[position - 1]
        if rule.enabled:
            rules.toggle(rule.id)


def _collect_sources(paths: list[Path], extractor: ContentExtractor) -> list[DocumentSource]:
    sources: list[DocumentSource] = []
    for path in paths:
        if not path.is_file():
            Log.warning(f"Skipping {path}: not a file")
        elif not extractor.supports(path.name):
            Log.warning(
                f"Skipping {path}: unsupported type, expected one of {extractor.supported_suffixes}"
            )
        else:
            sources.append(DocumentSource.from_path(path))
    return sources


def _print_preview(context: AuditContext, extractor: ContentExtractor, name: str) -> None:
    document = context.documents.find_by_name(name)
    if document is None:
        Log.warning(f"No document named '{name}' to preview")
        return
    try:
        content = preview_content(context, extractor, document.id)
    except ExtractionError as exc:
        Log.error(f"Preview failed for '{name}': {exc}")
        return
    print(f"=== {name} ===")
    print(content)


def _ask_overwrite(name: str) -> bool:
    answer = input(f'Document "{name}" already exists. Overwrite? [y/N] ')
    return answer.strip().lower() in ("y", "yes")


def _render(context: AuditContext) -> None:
    for document in context.documents.all():
        verdict = document.verdict
        if verdict is None:
            print(f"- {document.name}: not audited")
            continue
        print(f"- {document.name}: {verdict.status.value} ({verdict.status.label}) {verdict.summary}")
        if document.id not in context.expanded:
            continue
        for issue in verdict.issues:
            location = f" @ {issue.location}" if issue.location else ""
            print(
                f"    [{issue.severity.label}] {issue.category.label} | {issue.rule}: "
                f"{issue.description}{location}"
            )


if __name__ == "__main__":
    raise SystemExit(main())
