"""
Tests for the trailwalk command line.
"""

import pytest
from click.testing import CliRunner

from trailwalk.cli import cli, load_csv_ledger


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def ledger_csv(tmp_path):
    path = tmp_path / "steps.csv"
    path.write_text(
        "date,steps,distance_m\n"
        "2024-03-01,8000,\n"
        "2024-03-02,6000,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def calendar_csv(tmp_path):
    path = tmp_path / "steps.csv"
    path.write_text(
        "date,steps\n"
        "2024-03-08,12000\n"
        "2024-03-09,11000\n"
        "2024-03-10,3000\n",
        encoding="utf-8",
    )
    return path


# =============================================================================
# Test CSV loading
# =============================================================================

class TestLoadCsvLedger:

    def test_distance_from_stride_or_column(self, tmp_path):
        path = tmp_path / "steps.csv"
        path.write_text("date,steps,distance_m\n2024-03-01,1000,\n2024-03-02,1000,900\n")
        ledger = load_csv_ledger(path, 75)
        assert ledger.get("2024-03-01").distance_m == pytest.approx(750.0)
        assert ledger.get("2024-03-02").distance_m == 900.0

    def test_bad_row_names_line(self, tmp_path, runner):
        path = tmp_path / "steps.csv"
        path.write_text("date,steps\n2024-03-01,100\n2024-03-xx,100\n")
        result = runner.invoke(cli, ["calendar", str(path), "--today", "2024-03-10"])
        assert result.exit_code == 1
        assert "steps.csv:3" in result.output


# =============================================================================
# Test commands
# =============================================================================

class TestTrailsCommand:

    def test_lists_and_locks(self, runner):
        result = runner.invoke(cli, ["trails"])
        assert result.exit_code == 0
        lines = {line.split()[0]: line for line in result.output.splitlines()}
        assert "[premium]" not in lines["10k-classic"]
        assert "[premium]" in lines["inca-trail"]

    def test_premium(self, runner):
        result = runner.invoke(cli, ["trails", "--premium"])
        assert "[premium]" not in result.output


class TestProgressCommand:

    def test_replay_to_completion(self, runner, ledger_csv):
        result = runner.invoke(cli, [
            "progress", str(ledger_csv),
            "--trail", "10k-classic", "--start", "2024-03-01",
            "--stride", "75", "--today", "2024-03-05",
        ])
        assert result.exit_code == 0, result.output
        assert "2024-03-01  reached Water Station (2.0 km)" in result.output
        assert "2024-03-01  50% of 10K Classic" in result.output
        assert "2024-03-02  completed 10K Classic!" in result.output
        assert "Finished in 2 days, avg 7,000 steps/day, best day 8,000 steps" in result.output

    def test_in_progress(self, runner, ledger_csv):
        result = runner.invoke(cli, [
            "progress", str(ledger_csv),
            "--trail", "10k-classic", "--start", "2024-03-01",
            "--stride", "75", "--today", "2024-03-01", "--goal-days", "5",
        ])
        assert result.exit_code == 0, result.output
        assert "(60%)" in result.output
        assert "Next: Final Stretch in 2.0 km" in result.output
        assert "Goal: finish by 2024-03-05 (2.0 km/day)" in result.output

    def test_locked_trail(self, runner, ledger_csv):
        result = runner.invoke(cli, [
            "progress", str(ledger_csv), "--trail", "inca-trail", "--start", "2024-03-01",
        ])
        assert result.exit_code == 1

    def test_unknown_trail(self, runner, ledger_csv):
        result = runner.invoke(cli, [
            "progress", str(ledger_csv), "--trail", "nope", "--start", "2024-03-01",
        ])
        assert result.exit_code == 1


class TestCalendarCommand:

    def test_calendar_and_streaks(self, runner, calendar_csv):
        result = runner.invoke(cli, [
            "calendar", str(calendar_csv), "--goal", "10000", "--today", "2024-03-10",
        ])
        assert result.exit_code == 0, result.output
        assert "2024-02" in result.output
        assert "2024-03   2 achieved, 7 missed" in result.output
        assert " 8✓ 9✓\n" in result.output
        assert "10·11·" in result.output
        assert "Current streak: 2 days, longest: 2 days" in result.output
