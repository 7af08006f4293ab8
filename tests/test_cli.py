"""CLI smoke tests using click's CliRunner."""

import json
import sys

import pytest
from click.testing import CliRunner

from seo_audit.checks import ALL_CHECKS
from seo_audit.cli import cli, main

from conftest import BARE_PAGE, GOOD_PAGE

URL = "https://smilebright.example/family-dentistry"


@pytest.fixture()
def runner():
    return CliRunner()


class TestScan:

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["scan", URL, "--html", "-", "--json"], input=GOOD_PAGE)
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["url"] == URL
        assert len(data["checks"]) == len(ALL_CHECKS)
        assert data["status"] in {"pass", "fail", "warning"}

    def test_no_local_skips_local_checks(self, runner):
        result = runner.invoke(cli, ["scan", URL, "--html", "-", "--json", "--no-local"], input=GOOD_PAGE)
        checks = {c["checkId"]: c for c in json.loads(result.output)["checks"]}
        assert checks["nap-present"]["status"] == "skipped"

    def test_check_selection(self, runner):
        result = runner.invoke(
            cli, ["scan", "http://bare.example", "--html", "-", "--json", "--check", "https"],
            input=BARE_PAGE,
        )
        data = json.loads(result.output)
        assert [c["checkId"] for c in data["checks"]] == ["https"]
        assert data["status"] == "fail"

    def test_category_selection(self, runner):
        result = runner.invoke(cli, ["scan", URL, "--html", "-", "--json", "-c", "schema"], input=GOOD_PAGE)
        categories = {c["category"] for c in json.loads(result.output)["checks"]}
        assert categories == {"schema"}

    def test_rich_report(self, runner):
        result = runner.invoke(cli, ["scan", "http://bare.example", "--html", "-"], input=BARE_PAGE)
        assert result.exit_code == 0, result.output
        assert "SEO Score" in result.output
        assert "Issues Found" in result.output
        assert "HTTPS" in result.output

    def test_html_file(self, runner, tmp_path):
        page = tmp_path / "page.html"
        page.write_text(GOOD_PAGE, encoding="utf-8")
        result = runner.invoke(cli, ["scan", URL, "--html", str(page), "--json"])
        assert result.exit_code == 0, result.output

    def test_missing_html_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["scan", URL, "--html", str(tmp_path / "missing.html")])
        assert result.exit_code == 2

    def test_unknown_category_rejected(self, runner):
        result = runner.invoke(cli, ["scan", URL, "--html", "-", "-c", "social"], input=GOOD_PAGE)
        assert result.exit_code == 2

    def test_bad_environment_reported(self, runner):
        result = runner.invoke(
            cli, ["scan", URL, "--html", "-", "--json"],
            input=GOOD_PAGE, env={"SEO_AUDIT_MAX_WORKERS": "many"},
        )
        assert result.exit_code == 1
        assert "SEO_AUDIT_MAX_WORKERS" in result.output


class TestRecommend:

    def test_markdown(self, runner):
        result = runner.invoke(cli, ["recommend", "http://bare.example", "--html", "-"], input=BARE_PAGE)
        assert result.exit_code == 0, result.output
        assert result.output.startswith("# SEO Audit Recommendations")
        assert "[CRITICAL]" in result.output

    def test_json_with_limit(self, runner):
        result = runner.invoke(
            cli, ["recommend", "http://bare.example", "--html", "-", "-f", "json", "--limit", "1"],
            input=BARE_PAGE,
        )
        data = json.loads(result.output)
        assert data["summary"]["total"] == 1
        assert len(data["topPriorities"]) == 1

    def test_min_priority(self, runner):
        result = runner.invoke(
            cli, ["recommend", "http://bare.example", "--html", "-", "-f", "json", "--min-priority", "critical"],
            input=BARE_PAGE,
        )
        data = json.loads(result.output)
        assert all(r["priority"] == "critical" for r in data["topPriorities"])
        assert data["summary"]["high"] == 0


class TestChecks:

    def test_json_listing(self, runner):
        result = runner.invoke(cli, ["checks", "--json", "--category", "local"])
        assert result.exit_code == 0
        assert [c["id"] for c in json.loads(result.output)] == [
            "nap-present", "local-schema", "google-maps", "service-areas",
        ]

    def test_search(self, runner):
        result = runner.invoke(cli, ["checks", "--json", "--search", "privacy"])
        assert [c["id"] for c in json.loads(result.output)] == ["privacy-policy"]

    def test_table(self, runner):
        result = runner.invoke(cli, ["checks"])
        assert result.exit_code == 0
        assert f"{len(ALL_CHECKS)} checks" in result.output

    def test_unknown_log_level_reported(self, runner):
        result = runner.invoke(cli, ["checks"], env={"SEO_AUDIT_LOG_LEVEL": "LOUD"})
        assert result.exit_code == 1
        assert "SEO_AUDIT_LOG_LEVEL" in result.output
        assert "Traceback" not in result.output

    def test_log_level_is_case_insensitive(self, runner):
        result = runner.invoke(cli, ["checks", "--json"], env={"SEO_AUDIT_LOG_LEVEL": "debug"})
        assert result.exit_code == 0, result.output


def test_url_shortcut(monkeypatch, tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text(BARE_PAGE, encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["seo-audit", "bare.example", "--html", str(page), "--json"])

    with pytest.raises(SystemExit) as exc:
        main()

    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out)["url"] == "bare.example"
