"""Command-line entry point for the document linter."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .engine import BatchItem, LintRun, lint_many
from .errors import DoclintError
from .gate import evaluate_gate, load_reports
from .render import RENDERERS, render
from .rules import RuleRegistry, load_plugin
from .rules.builtin import default_registry
from .severity import Severity


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doclint",
        description="Rule-based static linter for structured documents (Bonita BDM bom.xml by default)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging on stderr.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint_parser = subparsers.add_parser("lint", help="Lint one or more documents.")
    lint_parser.add_argument("paths", nargs="+", help="Documents to lint (XML or JSON).")
    lint_parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        default=[],
        help="Only run rules of this category (repeatable).",
    )
    lint_parser.add_argument(
        "--format",
        choices=sorted(RENDERERS),
        default="text",
        help="Report format (defaults to text).",
    )
    lint_parser.add_argument(
        "--rules",
        dest="plugins",
        action="append",
        default=[],
        help="Python file exposing get_rules() with custom rules (repeatable).",
    )
    lint_parser.add_argument("--config", type=Path, default=None, help="Sidecar YAML configuration file.")
    lint_parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the rendered report instead of stdout.",
    )
    lint_parser.add_argument("--workers", type=int, default=1, help="Documents linted in parallel.")

    rules_parser = subparsers.add_parser("rules", help="List the registered rules.")
    rules_parser.add_argument("--category", dest="categories", action="append", default=[])
    rules_parser.add_argument("--rules", dest="plugins", action="append", default=[])

    gate_parser = subparsers.add_parser("gate", help="Fail when a JSON report reaches a severity threshold.")
    gate_parser.add_argument("report", type=Path, help="JSON report produced by 'doclint lint --format json'.")
    gate_parser.add_argument(
        "--fail-on",
        choices=[Severity.WARNING.value, Severity.ERROR.value],
        default=Severity.ERROR.value,
        help="Lowest severity that fails the gate (defaults to error).",
    )
    return parser


def build_registry(plugins: List[str]) -> RuleRegistry:
    registry = default_registry()
    for plugin in plugins:
        load_plugin(plugin, registry)
    return registry


def render_batch(items: List[BatchItem], report_format: str) -> str:
    reports = [item.report for item in items if item.report is not None]
    if report_format == "json" and len(items) > 1:
        return json.dumps([report.to_dict() for report in reports], indent=2)
    return "\n\n".join(render(report, report_format) for report in reports)


def write_output(payload: str, output_path: Optional[str]) -> None:
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload + "\n", encoding="utf-8")
        print(f"Report written to {output_path}")
    else:
        print(payload)


def _cmd_lint(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
        registry = build_registry(args.plugins)
    except DoclintError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 0

    unknown = [category for category in args.categories if category not in registry.categories()]
    if unknown:
        sys.stderr.write(f"warning: no rules in categories: {', '.join(unknown)}\n")

    lint_run = LintRun(registry=registry, config=config, categories=tuple(args.categories))
    items = lint_many(lint_run, args.paths, workers=args.workers)
    for item in items:
        if item.error is not None:
            sys.stderr.write(f"error: {item.error}\n")
    if any(item.report is not None for item in items):
        write_output(render_batch(items, args.format), args.output_path)
    # Informational tool: callers inspect the report status, not the exit code.
    return 0


def _cmd_rules(args: argparse.Namespace) -> int:
    try:
        registry = build_registry(args.plugins)
    except DoclintError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 0
    for rule in registry.select(args.categories):
        print(f"{rule.id:<22} {rule.category:<22} {rule.severity.value:<8} {rule.name}")
    return 0


def _cmd_gate(args: argparse.Namespace) -> int:
    try:
        reports = load_reports(args.report)
    except DoclintError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    fail_on = Severity.parse(args.fail_on)
    exit_code = 0
    for report in reports:
        passed, message = evaluate_gate(report, fail_on)
        print(message)
        if not passed:
            exit_code = 1
    return exit_code


COMMANDS = {
    "lint": _cmd_lint,
    "rules": _cmd_rules,
    "gate": _cmd_gate,
}


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
