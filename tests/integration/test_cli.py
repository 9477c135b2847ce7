#!/usr/bin/env python3
"""
Integration tests for the famfinance CLI.

Each test runs commands against a family data directory written to a
temporary location.
"""

import json

import pytest
from click.testing import CliRunner

from famfinance import __version__
from famfinance.cli.main import main
from tests.fixtures.ledger_data import FAMILY_ID


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def invoke(runner, family_data_dir):
    def _invoke(*args: str):
        return runner.invoke(main, list(args), catch_exceptions=False)

    return _invoke


@pytest.mark.integration
class TestGeneralCommands:
    """Test version and config commands."""

    def test_version(self, runner):
        result = runner.invoke(main, ["version"])

        assert result.exit_code == 0
        assert f"famfinance v{__version__}" in result.output

    def test_config(self, runner, data_dir):
        result = runner.invoke(main, ["config"])

        assert result.exit_code == 0
        assert "Environment: test" in result.output
        assert f"Data Directory: {data_dir}" in result.output
        assert "Top Outflows Limit: 10" in result.output

    def test_unknown_family(self, invoke):
        result = invoke("report", "income", "--family", "nobody")

        assert result.exit_code == 1
        assert "No data for family 'nobody'" in result.output


@pytest.mark.integration
@pytest.mark.budget
class TestBudgetCommands:
    """Test budget show and update."""

    def test_show_bootstraps_budget(self, invoke, family_data_dir):
        result = invoke("budget", "show", "-f", FAMILY_ID, "--month", "2024-03")

        assert result.exit_code == 0
        assert "Budget 2024-03 (2024-03-01 to 2024-03-31)" in result.output
        assert "$1,245.50" in result.output
        assert (family_data_dir / "budgets.json").exists()

    def test_show_json(self, invoke):
        result = invoke("budget", "show", "-f", FAMILY_ID, "--month", "2024-03", "--format", "json")

        data = json.loads(result.output)
        assert data["actual_spending"] == "$1,245.50"
        assert data["percent_spent"] == 0.0

    def test_show_no_bootstrap_missing(self, invoke, family_data_dir):
        result = invoke("budget", "show", "-f", FAMILY_ID, "--month", "2024-03", "--no-bootstrap")

        assert result.exit_code == 1
        assert "No budget for family" in result.output
        assert not (family_data_dir / "budgets.json").exists()

    def test_show_invalid_month(self, invoke):
        result = invoke("budget", "show", "-f", FAMILY_ID, "--month", "March")

        assert result.exit_code == 1
        assert "Invalid month format" in result.output

    def test_update(self, invoke):
        invoke("budget", "show", "-f", FAMILY_ID, "--month", "2024-03")

        result = invoke(
            "budget",
            "update",
            "-f",
            FAMILY_ID,
            "-m",
            "2024-03",
            "--budgeted-spending",
            "2,000",
            "--category",
            "food=250",
            "--category",
            "groceries=100",
        )

        assert result.exit_code == 0
        assert f"Updated budget 2024-03 for {FAMILY_ID}" in result.output

        data = json.loads(invoke("budget", "show", "-f", FAMILY_ID, "-m", "2024-03", "--format", "json").output)
        assert data["budgeted_spending"] == "$2,000.00"
        assert data["percent_spent"] == 62.3
        groceries = next(c for c in data["categories"] if c["id"] == "groceries")
        assert groceries["remaining"] == "-$20.00"

    def test_update_missing_budget(self, invoke):
        result = invoke("budget", "update", "-f", FAMILY_ID, "-m", "2024-05", "--budgeted-spending", "10")

        assert result.exit_code == 1
        assert "No budget for family" in result.output

    def test_update_strict_unknown_category(self, invoke):
        invoke("budget", "show", "-f", FAMILY_ID, "--month", "2024-03")

        result = invoke("budget", "update", "-f", FAMILY_ID, "-m", "2024-03", "--category", "yacht=5", "--strict")

        assert result.exit_code == 1
        assert "'yacht' is not part of this budget" in result.output

    def test_update_bad_category_option(self, invoke):
        result = invoke("budget", "update", "-f", FAMILY_ID, "-m", "2024-03", "--category", "food")

        assert result.exit_code == 2
        assert "CATEGORY_ID=AMOUNT" in result.output


@pytest.mark.integration
@pytest.mark.reports
class TestReportCommands:
    """Test report commands and their output formats."""

    def test_income(self, invoke):
        result = invoke("report", "income", "-f", FAMILY_ID, "--start", "2024-03-01", "--end", "2024-03-31")

        data = json.loads(result.output)
        assert data["income"]["total"] == "$3,012.34"
        assert data["expenses"]["total"] == "$1,245.50"
        assert data["net_savings"] == "$1,766.84"

    def test_income_end_before_start(self, invoke):
        result = invoke("report", "income", "-f", FAMILY_ID, "--start", "2024-03-31", "--end", "2024-03-01")
        assert result.exit_code == 1

    def test_balance_sheet(self, invoke):
        result = invoke("report", "balance-sheet", "-f", FAMILY_ID, "--as-of", "2024-03-31")

        data = json.loads(result.output)
        assert data["net_worth"] == "$14,700.00"
        assert data["assets"]["breakdown"] == {"checking": "$5,400.00", "savings": "$10,200.00"}

    def test_net_worth_json(self, invoke):
        result = invoke("report", "net-worth", "-f", FAMILY_ID, "--start", "2024-01-01", "--end", "2024-03-15")

        data = json.loads(result.output)
        assert [p["date"] for p in data] == ["2024-01-31", "2024-02-29", "2024-03-15"]

    def test_net_worth_trailing_months(self, invoke):
        result = invoke("report", "net-worth", "-f", FAMILY_ID, "--months", "2", "--end", "2024-03-31")

        data = json.loads(result.output)
        assert [p["net_worth"] for p in data] == ["$13,500.00", "$14,100.00", "$14,700.00"]

    def test_net_worth_csv(self, invoke):
        result = invoke(
            "report", "net-worth", "-f", FAMILY_ID, "--start", "2024-01-01", "--end", "2024-03-31", "--format", "csv"
        )

        lines = result.output.splitlines()
        assert lines[0] == "date,assets,liabilities,net_worth,currency"
        assert lines[3] == "2024-03-31,15600.00,900.00,14700.00,USD"

    def test_net_worth_csv_to_file(self, invoke, tmp_path):
        path = tmp_path / "exports" / "net_worth.csv"
        result = invoke(
            "report",
            "net-worth",
            "-f",
            FAMILY_ID,
            "--start",
            "2024-01-01",
            "--end",
            "2024-03-31",
            "--format",
            "csv",
            "--output",
            str(path),
        )

        assert f"Wrote 3 rows to {path}" in result.output
        assert len(path.read_text().splitlines()) == 4

    def test_cashflow(self, invoke):
        result = invoke("report", "cashflow", "-f", FAMILY_ID, "--start", "2024-02-01", "--end", "2024-03-31")

        data = json.loads(result.output)
        assert data["by_category"][0]["category_id"] == "salary"
        assert [m["month"] for m in data["monthly_breakdown"]] == ["Feb 2024", "Mar 2024"]

    def test_cashflow_csv(self, invoke):
        result = invoke(
            "report", "cashflow", "-f", FAMILY_ID, "--start", "2024-02-01", "--end", "2024-03-31", "--format", "csv"
        )

        lines = result.output.splitlines()
        assert lines[0] == "month,start_date,end_date,income,expenses,net"
        assert lines[2] == "Mar 2024,2024-03-01,2024-03-31,3012.34,1245.50,1766.84"

    def test_outflows(self, invoke):
        result = invoke("report", "outflows", "-f", FAMILY_ID, "--start", "2024-03-01", "--end", "2024-03-31")

        data = json.loads(result.output)
        assert [(o["category"], o["percentage"]) for o in data] == [
            ("Rent", 80.3),
            ("Food", 16.1),
            ("Transport", 3.7),
        ]

    def test_outflows_limit(self, invoke):
        result = invoke(
            "report", "outflows", "-f", FAMILY_ID, "--start", "2024-03-01", "--end", "2024-03-31", "--limit", "1"
        )
        assert len(json.loads(result.output)) == 1

    def test_outflows_json_to_file(self, invoke, tmp_path):
        path = tmp_path / "outflows.json"
        result = invoke(
            "report", "outflows", "-f", FAMILY_ID, "--start", "2024-03-01", "--end", "2024-03-31", "-o", str(path)
        )

        assert f"Wrote report to {path}" in result.output
        assert json.loads(path.read_text())[0]["category_id"] == "rent"

    def test_overview(self, invoke, family_data_dir):
        result = invoke("report", "overview", "-f", FAMILY_ID, "--as-of", "2024-03-31")

        data = json.loads(result.output)
        assert data["transactions_count"] == 7
        assert data["net_worth"] == "$14,700.00"
        assert data["budget"]["start_date"] == "2024-03-01"
        assert (family_data_dir / "budgets.json").exists()

    def test_overview_quarterly(self, invoke):
        result = invoke("report", "overview", "-f", FAMILY_ID, "--period-type", "quarterly", "--as-of", "2024-03-15")

        data = json.loads(result.output)
        assert (data["start_date"], data["end_date"]) == ("2024-01-01", "2024-03-31")
        assert data["transactions_count"] == 10
