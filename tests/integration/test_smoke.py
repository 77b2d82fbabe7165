"""
End-to-end tests for the `txn-queries` CLI.

These run the typer app in-process against the sample export and verify that:
1. Every query runs and reports through the table and JSON outputs
2. By-name queries use the client from the command line or the environment
3. Load failures and unknown queries exit with a non-zero status
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from txn_queries.main import app

EXPECTED_QUERY_COUNT = 10

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    for var in ("TRANSACTIONS_PATH", "CLIENT_NAME", "LOG_JSON"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("RESULTS_DIR", str(tmp_path / "results"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


class TestReport:
    def test_report_json_all_queries(self, transactions_path: Path):
        result = runner.invoke(
            app, ["report", "--path", str(transactions_path), "--client", "Tom Shelby", "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert len(payload) == EXPECTED_QUERY_COUNT
        values = {entry["query"]: entry["value"] for entry in payload}
        assert values["total_amount"] == pytest.approx(2938.37)
        assert values["total_amount_sent_by"] == pytest.approx(745.06)
        assert values["count_unique_clients"] == 14
        assert values["unsolved_issue_ids"] == [1, 3, 15, 54, 99]
        assert [t["mtn"] for t in values["top3_by_amount"]] == ["5465465", "32612651", "32612651"]
        assert values["top_sender"] == "Grace Burgess"

    def test_report_client_from_environment(self, transactions_path: Path, monkeypatch):
        monkeypatch.setenv("CLIENT_NAME", "Billy Kimber")

        result = runner.invoke(
            app,
            [
                "report",
                "-p",
                str(transactions_path),
                "-q",
                "total_amount_sent_by",
                "-q",
                "has_open_compliance_issue",
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload[0]["value"] == pytest.approx(459.09)
        assert payload[1]["value"] is False

    def test_report_table(self, transactions_path: Path):
        result = runner.invoke(
            app, ["report", "-p", str(transactions_path), "-q", "top_sender", "-q", "max_amount"]
        )

        assert result.exit_code == 0, result.output
        assert "Transaction Query Results" in result.stdout
        assert "Grace Burgess" in result.stdout
        assert "985.00" in result.stdout

    def test_report_persist(self, transactions_path: Path, tmp_path: Path):
        result = runner.invoke(
            app, ["report", "-p", str(transactions_path), "-q", "max_amount", "--persist", "--json"]
        )

        assert result.exit_code == 0, result.output
        latest = json.loads((tmp_path / "results" / "latest.json").read_text(encoding="utf-8"))
        assert latest["results"][0]["value"] == 985.0

    def test_report_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["report", "-p", str(tmp_path / "missing.json")])

        assert result.exit_code == 1

    def test_report_unknown_query(self, transactions_path: Path):
        result = runner.invoke(app, ["report", "-p", str(transactions_path), "-q", "median"])

        assert result.exit_code == 2


class TestInfo:
    def test_queries_lists_registry(self):
        result = runner.invoke(app, ["queries"])

        assert result.exit_code == 0
        assert "top3_by_amount" in result.stdout
        assert "(needs client)" in result.stdout

    def test_info_shows_settings(self, monkeypatch):
        monkeypatch.setenv("TRANSACTIONS_PATH", "data/export.json")

        result = runner.invoke(app, ["info"])

        assert result.exit_code == 0
        assert "transactions=data/export.json" in result.stdout
