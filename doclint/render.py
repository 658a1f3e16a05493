"""Pure renderers turning a :class:`Report` into text, JSON or Markdown."""

from __future__ import annotations

import json
from typing import Callable, Dict, List

from .result import Finding, Report
from .severity import SEVERITY_ORDER

RULE_WIDTH = 40


def _finding_line(finding: Finding) -> str:
    return f"[{finding.severity.value.upper()}] {finding.category}: {finding.message} ({finding.locator})"


def format_text(report: Report) -> str:
    """Create a summary table (category x severity) followed by one line per finding."""

    lines: List[str] = []
    lines.append("Lint Summary")
    lines.append("=" * RULE_WIDTH)
    if report.source:
        lines.append(f"Document  : {report.source}")
    header = f"{'Category':<22} |" + "".join(f" {severity.value:>7} |" for severity in SEVERITY_ORDER) + f" {'Total':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    for category in report.categories:
        counts = report.category_summary(category)
        row = f"{category:<22} |" + "".join(f" {counts.count(severity):>7} |" for severity in SEVERITY_ORDER)
        lines.append(row + f" {counts.total:>5}")
    totals = f"{'TOTAL':<22} |" + "".join(f" {count:>7} |" for _, count in report.summary.as_rows())
    lines.append("-" * len(header))
    lines.append(totals + f" {report.total:>5}")
    lines.append("")
    lines.append(f"Status    : {report.status.value.upper()}")
    lines.append(f"Findings  : {report.total}")

    if report.total:
        lines.append("")
        lines.append("Findings")
        lines.append("-" * RULE_WIDTH)
        for finding in report.findings:
            lines.append(_finding_line(finding))
    return "\n".join(lines)


def format_json(report: Report) -> str:
    return json.dumps(report.to_dict(), indent=2)


def format_markdown(report: Report) -> str:
    """Render a Markdown report with a summary table and one section per category."""

    lines: List[str] = ["# Lint Report", ""]
    if report.source:
        lines.append(f"**Document:** `{report.source}`  ")
    lines.append(f"**Status:** {report.status.value}  ")
    lines.append(f"**Findings:** {report.total}")
    lines.append("")
    lines.append("| Category | " + " | ".join(severity.value for severity in SEVERITY_ORDER) + " | Total |")
    lines.append("|---|" + "---:|" * (len(SEVERITY_ORDER) + 1))
    for category in report.categories:
        counts = report.category_summary(category)
        cells = " | ".join(str(counts.count(severity)) for severity in SEVERITY_ORDER)
        lines.append(f"| {category} | {cells} | {counts.total} |")
    for category, findings in report.findings_by_category.items():
        lines.append("")
        lines.append(f"## {category}")
        lines.append("")
        for finding in findings:
            lines.append(f"- **{finding.severity.value.upper()}** `{finding.rule}`: {finding.message} (`{finding.locator}`)")
    lines.append("")
    return "\n".join(lines)


RENDERERS: Dict[str, Callable[[Report], str]] = {
    "text": format_text,
    "json": format_json,
    "markdown": format_markdown,
}


def render(report: Report, fmt: str = "text") -> str:
    """Render ``report`` in ``fmt``; raises ``ValueError`` for unknown formats."""

    try:
        renderer = RENDERERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown report format: {fmt}") from None
    return renderer(report)
