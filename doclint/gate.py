"""CI gate: re-read a JSON lint report and decide whether the pipeline may proceed."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .errors import NotFoundError, ParseError
from .severity import SEVERITY_ORDER, Severity
from .utils import read_text_file

ORDER = [severity.value for severity in SEVERITY_ORDER]


def load_reports(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON report file holding one report or a list of reports."""

    if not Path(path).is_file():
        raise NotFoundError(str(path))
    text = read_text_file(path)
    if not text.strip():
        raise ParseError("empty lint report", source=str(path))
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc), source=str(path), position=(exc.lineno, exc.colno)) from exc
    reports = data if isinstance(data, list) else [data]
    for report in reports:
        if not isinstance(report, dict) or not isinstance(report.get("summary"), dict):
            raise ParseError("not a lint report", source=str(path))
        for severity, count in report["summary"].items():
            if isinstance(count, bool) or not isinstance(count, int):
                raise ParseError(f"summary count for '{severity}' is not an integer: {count!r}", source=str(path))
    return reports


def _all_findings(report: Dict[str, Any]) -> List[Dict[str, Any]]:
    findings: List[Dict[str, Any]] = []
    for category in report.get("categories", {}).values():
        findings.extend(category.get("findings", []))
    return findings


def top_findings(report: Dict[str, Any], limit: int = 10) -> List[str]:
    actionable = [item for item in _all_findings(report) if item.get("severity") != Severity.PASS.value]
    ordered = sorted(
        actionable,
        key=lambda item: ORDER.index(item.get("severity")) if item.get("severity") in ORDER else len(ORDER),
    )
    highlights = []
    for item in ordered[:limit]:
        highlights.append(
            f"[{str(item.get('severity')).upper()}] {item.get('category')}: {item.get('message')} ({item.get('locator')})"
        )
    return highlights


def evaluate_gate(report: Dict[str, Any], fail_on: Severity = Severity.ERROR) -> Tuple[bool, str]:
    """Return whether ``report`` passes the gate and a human-readable explanation."""

    summary = report.get("summary", {})
    blocking = sum(
        summary.get(severity.value, 0)
        for severity in SEVERITY_ORDER
        if severity is not Severity.PASS and severity.rank >= fail_on.rank
    )
    passed = blocking == 0
    message_lines = [
        "Lint gate",
        f"Document: {report.get('source') or '<unknown>'}",
        f"Status: {report.get('status')}",
        f"Passed: {passed} (fail on {fail_on.value})",
        f"Summary: {summary}",
    ]
    highlights = top_findings(report)
    if highlights and not passed:
        message_lines.append("Highlights:")
        message_lines.extend(highlights)
    return passed, "\n".join(message_lines)
