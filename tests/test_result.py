import json
from dataclasses import FrozenInstanceError

import pytest

from doclint.engine import LintRun
from doclint.render import render
from doclint.result import Finding, ReportStatus, aggregate
from doclint.severity import Severity


def _finding(category: str, severity: Severity, message: str = "msg") -> Finding:
    return Finding(rule=f"{category}-rule", category=category, severity=severity, locator="/model", message=message)


def test_aggregate_groups_by_category_preserving_order():
    findings = [
        _finding("naming", Severity.WARNING, "first"),
        _finding("documentation", Severity.WARNING),
        _finding("naming", Severity.ERROR, "second"),
    ]

    report = aggregate(findings)

    assert report.categories == ["naming", "documentation"]
    assert [f.message for f in report.findings_by_category["naming"]] == ["first", "second"]
    assert report.summary.to_dict() == {"error": 1, "warning": 2, "pass": 0}
    assert sum(report.category_counts.values()) == report.total == 3


@pytest.mark.parametrize(
    "severities, status",
    [
        ([], ReportStatus.CLEAN),
        ([Severity.PASS], ReportStatus.CLEAN),
        ([Severity.PASS, Severity.WARNING], ReportStatus.WARNINGS_ONLY),
        ([Severity.WARNING, Severity.ERROR], ReportStatus.FAILED),
    ],
)
def test_status_follows_the_worst_severity(severities, status):
    report = aggregate(_finding("naming", severity) for severity in severities)

    assert report.status is status


def test_category_counts_match_total_on_fixture(bom_path):
    report = LintRun().lint_path(bom_path)

    assert sum(report.category_counts.values()) == report.total


def test_text_render_has_summary_table_and_finding_lines(bom_path):
    report = LintRun().lint_path(bom_path)

    text = render(report, "text")

    assert text.startswith("Lint Summary")
    assert "Status    : FAILED" in text
    assert "[ERROR] length-constraint: index name 'IDX_CUSTOMER_NAME_AND_TYPE' exceeds 20 characters" in text
    assert "(/businessObjectModel/businessObjects/businessObject[@qualifiedName='com.acme.model.Customer']" in text
    assert text.count("\n[") == report.total


def test_json_render_mirrors_report(bom_path):
    report = LintRun().lint_path(bom_path)

    data = json.loads(render(report, "json"))

    assert data["status"] == "failed"
    assert data["total"] == report.total
    assert data["summary"] == {"error": 3, "warning": 6, "pass": 0}
    assert data["categories"]["naming"]["count"] == 3
    assert data["categories"]["naming"]["findings"][0]["severity"] == "warning"


def test_markdown_render_has_a_section_per_category(bom_path):
    report = LintRun().lint_path(bom_path)

    markdown = render(report, "markdown")

    assert markdown.startswith("# Lint Report")
    for category in report.categories:
        assert f"## {category}" in markdown


@pytest.mark.parametrize("fmt", ["text", "json", "markdown"])
def test_render_is_deterministic(bom_path, fmt):
    report = LintRun().lint_path(bom_path)

    assert render(report, fmt) == render(report, fmt)
    assert render(report, fmt) == render(LintRun().lint_path(bom_path), fmt)


def test_clean_report_renders_without_findings_section():
    text = render(aggregate([]), "text")

    assert "Status    : CLEAN" in text
    assert "Findings  : 0" in text
    assert "\n[" not in text


def test_unknown_format_is_rejected():
    with pytest.raises(ValueError):
        render(aggregate([]), "html")


def test_report_cannot_be_mutated():
    report = aggregate([_finding("naming", Severity.WARNING)])

    with pytest.raises(FrozenInstanceError):
        report.summary.warning = 0
    with pytest.raises(TypeError):
        report.findings_by_category["naming"] = ()
    assert not hasattr(report.summary, "increment")
    assert report.summary.warning == 1
