"""Tests for the healthlog command line interface."""

from typer.testing import CliRunner

from healthlog import __version__
from healthlog.cli import app

runner = CliRunner()


def _invoke(*args):
    return runner.invoke(app, list(args))


def test_summary(export_file):
    result = _invoke("summary", "--file", str(export_file), "--date", "2026-10-19")
    assert result.exit_code == 0, result.output
    assert "Streak: 3 days" in result.output
    assert "60% filled in" in result.output
    assert "Weekly Averages" in result.output
    assert "Meditate" in result.output


def test_streak(export_file):
    result = _invoke("streak", "--file", str(export_file), "--date", "2026-10-19")
    assert result.exit_code == 0, result.output
    assert "3 day streak" in result.output


def test_habit_streak(export_file):
    result = _invoke(
        "streak", "--habit", "meditation", "--file", str(export_file), "--date", "2026-10-19"
    )
    assert result.exit_code == 0, result.output
    assert "meditation: 2 day streak" in result.output


def test_streak_broken_by_missing_day(export_file):
    result = _invoke("streak", "--file", str(export_file), "--date", "2026-10-20")
    assert result.exit_code == 0, result.output
    assert "0 day streak" in result.output


def test_habits(export_file):
    result = _invoke("habits", "--file", str(export_file), "--date", "2026-10-19")
    assert result.exit_code == 0, result.output
    assert "Habit Streaks" in result.output
    assert "stretch" in result.output


def test_trends(export_file):
    result = _invoke("trends", "--file", str(export_file), "--date", "2026-10-19")
    assert result.exit_code == 0, result.output
    assert "Sleep" in result.output
    assert "+88%" in result.output


def test_insights(export_file):
    result = _invoke("insights", "--file", str(export_file), "--date", "2026-10-19")
    assert result.exit_code == 0, result.output
    assert "No issues spotted this week" in result.output


def test_start_copies_yesterday(export_file):
    result = _invoke(
        "start", "--user", "user-1", "--file", str(export_file), "--date", "2026-10-20"
    )
    assert result.exit_code == 0, result.output
    assert '"id": "2026-10-20"' in result.output
    assert '"timeAsleep"' in result.output
    assert '"completed": false' in result.output


def test_missing_file(tmp_path):
    result = _invoke("summary", "--file", str(tmp_path / "missing.json"))
    assert result.exit_code == 1
    assert "not found" in result.output


def test_invalid_date(export_file):
    result = _invoke("streak", "--file", str(export_file), "--date", "2026-02-30")
    assert result.exit_code == 2


def test_version():
    result = _invoke("version")
    assert result.exit_code == 0
    assert f"healthlog v{__version__}" in result.output


def test_log_level_is_case_insensitive():
    result = _invoke("--log-level", "debug", "version")
    assert result.exit_code == 0, result.output


def test_unknown_log_level():
    result = _invoke("--log-level", "verbose", "version")
    assert result.exit_code == 2
    assert "healthlog v" not in result.output
