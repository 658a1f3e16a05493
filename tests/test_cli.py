import json

from doclint import cli


def test_cli_prints_text_report(bom_path, capsys):
    exit_code = cli.main(["lint", str(bom_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Lint Summary" in captured.out
    assert "Status    : FAILED" in captured.out


def test_cli_generates_json_report(bom_path, tmp_path, capsys):
    output_path = tmp_path / "reports" / "lint.json"

    exit_code = cli.main(["lint", str(bom_path), "--format", "json", "--out", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == 0  # informational: status lives in the report
    assert f"Report written to {output_path}" in captured.out
    data = json.loads(output_path.read_text(encoding="utf-8"))
    assert data["status"] == "failed"
    assert data["summary"]["error"] == 3


def test_cli_category_filter(bom_path, capsys):
    cli.main(["lint", str(bom_path), "--category", "naming", "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert list(data["categories"]) == ["naming"]
    assert data["status"] == "failed"


def test_cli_loads_sidecar_config(bom_path, tmp_path, capsys):
    config_path = tmp_path / "doclint.yml"
    config_path.write_text(
        "severity_overrides:\n  reserved-keyword: warning\n  count-companion: warning\n  name-length: warning\n",
        encoding="utf-8",
    )

    cli.main(["lint", str(bom_path), "--config", str(config_path), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "warnings-only"


def test_cli_reports_missing_document_and_exits_zero(tmp_path, capsys):
    exit_code = cli.main(["lint", str(tmp_path / "missing.xml")])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Document not found" in captured.err
    assert captured.out == ""


def test_cli_batch_json_is_a_list(bom_path, capsys):
    cli.main(["lint", str(bom_path), str(bom_path), "--format", "json", "--workers", "2"])

    data = json.loads(capsys.readouterr().out)
    assert len(data) == 2
    assert data[0] == data[1]


def test_cli_custom_rule_plugin(bom_path, tmp_path, capsys):
    plugin = tmp_path / "broken_rule.py"
    plugin.write_text(
        """
from doclint.rules import Rule
from doclint.severity import Severity


def _check(document, config):
    raise KeyError("missing")


def get_rule():
    return Rule(id="broken", name="Broken", category="custom", severity=Severity.WARNING, check=_check)
""",
        encoding="utf-8",
    )

    exit_code = cli.main(["lint", str(bom_path), "--rules", str(plugin), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["categories"]["engine"]["count"] == 1
    assert data["categories"]["engine"]["findings"][0]["rule"] == "broken"
    assert data["categories"]["naming"]["count"] == 3


def test_cli_lists_rules(capsys):
    exit_code = cli.main(["rules", "--category", "naming"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert [line.split()[0] for line in lines] == ["required-prefix", "camel-case", "reserved-keyword"]


def test_cli_plugin_rule_with_plain_string_severity(bom_path, tmp_path, capsys):
    plugin = tmp_path / "string_severity.py"
    plugin.write_text(
        """
from doclint.result import Hit
from doclint.rules import Rule


def get_rules():
    return [
        Rule(id="plain", name="Plain", category="custom", severity="warning", check=lambda d, c: [Hit("/", "x")]),
        Rule(id="odd-hit", name="Odd", category="custom", severity="warn", check=lambda d, c: [Hit("/", "y", "fatal")]),
    ]
""",
        encoding="utf-8",
    )

    exit_code = cli.main(["lint", str(bom_path), "--rules", str(plugin), "--format", "json"])

    data = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert data["categories"]["custom"]["findings"][0]["severity"] == "warning"
    engine = data["categories"]["engine"]["findings"]
    assert [finding["rule"] for finding in engine] == ["odd-hit"]
    assert "fatal" in engine[0]["message"]


def test_cli_plugin_whose_factory_raises_exits_zero(bom_path, tmp_path, capsys):
    plugin = tmp_path / "exploding_factory.py"
    plugin.write_text("def get_rules():\n    raise RuntimeError('boom')\n", encoding="utf-8")

    exit_code = cli.main(["lint", str(bom_path), "--rules", str(plugin)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "boom" in captured.err
    assert captured.out == ""
    assert cli.main(["rules", "--rules", str(plugin)]) == 0


def test_cli_plugin_with_invalid_rule_severity_exits_zero(bom_path, tmp_path, capsys):
    plugin = tmp_path / "bad_severity.py"
    plugin.write_text(
        """
from doclint.rules import Rule


def get_rule():
    return Rule(id="bad", name="Bad", category="custom", severity="critical", check=lambda d, c: [])
""",
        encoding="utf-8",
    )

    exit_code = cli.main(["lint", str(bom_path), "--rules", str(plugin)])

    assert exit_code == 0
    assert "Unknown severity" in capsys.readouterr().err
