"""
Unit tests for CLI module.

Tests command-line interface functionality using Click's testing utilities.
"""

import json
import logging

import pytest
from click.testing import CliRunner

import paydown
from paydown.cli import main, __version__
from paydown.logging_config import configure_logging


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def runner(monkeypatch, tmp_path):
    """CLI runner isolated from PAYDOWN_ variables and local .env files."""
    for name in ("DEBUG", "LOG_LEVEL", "MAX_PERIODS", "CURRENCY_SYMBOL"):
        monkeypatch.delenv(f"PAYDOWN_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def stuck_plan(tmp_path):
    """Plan with one obligation that never amortizes."""
    plan = {
        "schema_version": "0.1.0",
        "obligations": [
            {"id": "p", "name": "Payday", "balance": 100000.0,
             "annual_rate": 24.0, "minimum_payment": 50.0},
        ],
    }
    path = tmp_path / "stuck.json"
    path.write_text(json.dumps(plan))
    return path


# ============================================================================
# MAIN COMMAND TESTS
# ============================================================================

class TestMainCommand:

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Debt payoff planner" in result.output
        for command in ("simulate", "compare", "payment", "schedule", "plan", "info"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert __version__ == paydown.__version__

    def test_invalid_env_settings(self, runner, monkeypatch):
        monkeypatch.setenv("PAYDOWN_MAX_PERIODS", "0")
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 1
        assert "PAYDOWN_" in result.output


# ============================================================================
# SIMULATE COMMAND TESTS
# ============================================================================

class TestSimulateCommand:

    def test_quiet_output(self, runner, plan_file):
        result = runner.invoke(main, ["-q", "simulate", "-p", str(plan_file)])

        assert result.exit_code == 0
        assert "Strategy: avalanche" in result.output
        assert "Duration: 29 months" in result.output
        assert "Payoff order: a, b" in result.output
        assert "Total interest: $" in result.output

    def test_strategy_override(self, runner, plan_file):
        result = runner.invoke(main, ["-q", "simulate", "-p", str(plan_file), "-s", "SNOWBALL"])

        assert result.exit_code == 0
        assert "Strategy: snowball" in result.output
        assert "Payoff order: b, a" in result.output

    def test_extra_override(self, runner, plan_file):
        base = runner.invoke(main, ["-q", "simulate", "-p", str(plan_file)])
        more = runner.invoke(main, ["-q", "simulate", "-p", str(plan_file), "--extra", "1000"])

        assert more.exit_code == 0
        assert base.output != more.output

    def test_negative_extra_rejected(self, runner, plan_file):
        result = runner.invoke(main, ["simulate", "-p", str(plan_file), "--extra", "-5"])
        assert result.exit_code != 0

    def test_table_output(self, runner, plan_file):
        result = runner.invoke(main, ["simulate", "-p", str(plan_file)])

        assert result.exit_code == 0
        assert "Payoff Plan" in result.output
        assert "Credit card" in result.output

    def test_writes_output(self, runner, plan_file, tmp_path):
        out = tmp_path / "results" / "outcome.json"
        result = runner.invoke(
            main, ["simulate", "-p", str(plan_file), "-o", str(out), "--no-schedule"]
        )

        assert result.exit_code == 0
        assert "Outcome saved to" in result.output
        saved = json.loads(out.read_text())
        assert saved["retirement_order"] == ["a", "b"]
        assert "schedule" not in saved

    def test_unconverged_warning(self, runner, stuck_plan):
        result = runner.invoke(main, ["-q", "simulate", "-p", str(stuck_plan)])

        assert result.exit_code == 0
        assert "not paid off within 600 months" in result.output
        assert "Warning: p will not be paid off" in result.output

    def test_ceiling_from_env(self, runner, stuck_plan, monkeypatch):
        monkeypatch.setenv("PAYDOWN_MAX_PERIODS", "24")
        result = runner.invoke(main, ["-q", "simulate", "-p", str(stuck_plan)])
        assert "within 24 months" in result.output

    def test_currency_from_env(self, runner, plan_file, monkeypatch):
        monkeypatch.setenv("PAYDOWN_CURRENCY_SYMBOL", "€")
        result = runner.invoke(main, ["-q", "simulate", "-p", str(plan_file)])
        assert "Total paid: €" in result.output

    def test_missing_plan(self, runner, tmp_path):
        result = runner.invoke(main, ["simulate", "-p", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_invalid_plan(self, runner, tmp_path, plan_data):
        plan_data["obligations"][0]["balance"] = -10
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(plan_data))

        result = runner.invoke(main, ["simulate", "-p", str(path)])
        assert result.exit_code == 1
        assert "Error loading plan" in result.output


# ============================================================================
# COMPARE COMMAND TESTS
# ============================================================================

class TestCompareCommand:

    def test_quiet_output(self, runner, plan_file):
        result = runner.invoke(main, ["-q", "compare", "-p", str(plan_file)])

        assert result.exit_code == 0
        assert "avalanche:" in result.output
        assert "snowball:" in result.output
        assert "Interest saved by avalanche: $" in result.output
        assert "Months saved by avalanche:" in result.output

    def test_table_output(self, runner, plan_file):
        result = runner.invoke(main, ["compare", "-p", str(plan_file)])

        assert result.exit_code == 0
        assert "Strategy Comparison" in result.output
        assert "Preferred: avalanche" in result.output

    def test_writes_output(self, runner, plan_file, tmp_path):
        out = tmp_path / "comparison.json"
        result = runner.invoke(main, ["compare", "-p", str(plan_file), "-o", str(out)])

        assert result.exit_code == 0
        saved = json.loads(out.read_text())
        assert saved["interest_differential"] > 0
        assert saved["avalanche"]["retirement_order"] == ["a", "b"]
        assert saved["snowball"]["retirement_order"] == ["b", "a"]

    def test_duplicate_ids(self, runner, tmp_path, plan_data):
        plan_data["obligations"][1]["id"] = "a"
        path = tmp_path / "dup.json"
        path.write_text(json.dumps(plan_data))

        result = runner.invoke(main, ["compare", "-p", str(path)])
        assert result.exit_code == 1
        assert "Duplicate obligation ids" in result.output


# ============================================================================
# PAYMENT / SCHEDULE COMMAND TESTS
# ============================================================================

class TestPaymentCommand:

    def test_quiet(self, runner):
        result = runner.invoke(main, ["-q", "payment", "200000", "6", "360"])
        assert result.exit_code == 0
        assert result.output.strip() == "1199.10"

    def test_formatted(self, runner):
        result = runner.invoke(main, ["payment", "1200", "0", "12"])
        assert result.exit_code == 0
        assert "Monthly payment: $100.00" in result.output

    def test_invalid_rate(self, runner):
        result = runner.invoke(main, ["payment", "1000", "150", "12"])
        assert result.exit_code == 1
        assert "Invalid loan terms" in result.output


class TestScheduleCommand:

    def test_quiet_rows(self, runner):
        result = runner.invoke(main, ["-q", "schedule", "1200", "0", "12", "--rows", "3"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert len(lines) == 3
        assert lines[0].split("\t")[2] == "100.00"
        assert lines[2].split("\t")[-1] == "900.00"

    def test_all_rows(self, runner):
        result = runner.invoke(main, ["-q", "schedule", "1200", "0", "12", "--rows", "0"])
        assert len(result.output.strip().splitlines()) == 12

    def test_fixed_payment(self, runner):
        result = runner.invoke(
            main, ["-q", "schedule", "1000", "0", "12", "--payment", "300", "--rows", "0"]
        )
        lines = result.output.strip().splitlines()
        assert len(lines) == 4
        assert lines[-1].split("\t")[2] == "100.00"

    def test_table(self, runner):
        result = runner.invoke(main, ["schedule", "10000", "5", "24"])
        assert result.exit_code == 0
        assert "Amortization (24 payments)" in result.output

    def test_csv(self, runner, tmp_path):
        out = tmp_path / "sched.csv"
        result = runner.invoke(main, ["schedule", "1200", "0", "12", "--csv", str(out)])

        assert result.exit_code == 0
        assert "Schedule saved to" in result.output
        assert len(out.read_text().strip().splitlines()) == 13

    def test_invalid_payment(self, runner):
        result = runner.invoke(main, ["schedule", "1000", "5", "12", "--payment", "0"])
        assert result.exit_code == 1
        assert "Invalid loan terms" in result.output


# ============================================================================
# PLAN COMMAND TESTS
# ============================================================================

class TestPlanCommands:

    def test_validate_quiet(self, runner, plan_file):
        result = runner.invoke(main, ["-q", "plan", "validate", str(plan_file)])

        assert result.exit_code == 0
        assert "Plan is valid" in result.output
        assert "Obligations: 2" in result.output

    def test_validate_table(self, runner, plan_file):
        result = runner.invoke(main, ["plan", "validate", str(plan_file)])
        assert result.exit_code == 0
        assert "Plan Valid" in result.output

    def test_validate_invalid(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        result = runner.invoke(main, ["plan", "validate", str(path)])

        assert result.exit_code == 1
        assert "Plan validation failed" in result.output

    @pytest.mark.parametrize("template,count", [("basic", 0), ("sample", 3)])
    def test_create(self, runner, tmp_path, template, count):
        out = tmp_path / f"{template}.json"
        result = runner.invoke(main, ["plan", "create", str(out), "--template", template])

        assert result.exit_code == 0
        assert "Created plan file" in result.output
        saved = json.loads(out.read_text())
        assert saved["schema_version"] == "0.1.0"
        assert len(saved["obligations"]) == count

    def test_created_plan_simulates(self, runner, tmp_path):
        out = tmp_path / "sample.json"
        runner.invoke(main, ["plan", "create", str(out), "-t", "sample"])
        result = runner.invoke(main, ["-q", "simulate", "-p", str(out)])

        assert result.exit_code == 0
        assert "Payoff order:" in result.output


# ============================================================================
# INFO / LOGGING TESTS
# ============================================================================

class TestInfoCommand:

    def test_quiet(self, runner):
        result = runner.invoke(main, ["-q", "info"])

        assert result.exit_code == 0
        assert f"Paydown Version: {__version__}" in result.output
        assert "Safety ceiling: 600 months" in result.output

    def test_panel(self, runner):
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0
        assert "System Information" in result.output


class TestConfigureLogging:

    def test_single_handler(self):
        configure_logging("INFO")
        logger = configure_logging("DEBUG")

        named = [h for h in logger.handlers if h.get_name() == "paydown-cli"]
        assert len(named) == 1
        assert logger.level == logging.DEBUG

    def test_writes_to_stream(self, tmp_path):
        path = tmp_path / "log.txt"
        with open(path, "w") as stream:
            configure_logging("info", stream=stream)
            logging.getLogger("paydown.simulator").info("hello from the engine")
        assert "hello from the engine" in path.read_text()
