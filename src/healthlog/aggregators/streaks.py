"""Completion and habit streaks over daily logs."""

from collections.abc import Callable, Iterable
from datetime import date, timedelta

import structlog

from healthlog.models.daily_log import DailyLog

logger = structlog.get_logger()


def dedupe_logs(logs: Iterable[DailyLog]) -> list[DailyLog]:
    """Keep one log per id, preferring the most recently updated.

    Logs without ``updated_at`` lose to logs that have one; between equal
    timestamps the later log in the input wins. Order of first appearance
    is preserved.
    """
    kept: dict[str, DailyLog] = {}
    for log in logs:
        current = kept.get(log.id)
        if current is None or _updated_key(log) >= _updated_key(current):
            kept[log.id] = log
    return list(kept.values())


def _updated_key(log: DailyLog) -> tuple[bool, float]:
    if log.updated_at is None:
        return (False, 0.0)
    # Naive datetimes count as local time
    return (True, log.updated_at.timestamp())


def _walk_streak(
    logs: Iterable[DailyLog],
    qualifies: Callable[[DailyLog], bool],
    today: date | None,
) -> int:
    """Count qualifying logs on consecutive days ending today.

    The i-th most recent log must fall exactly on ``today - i`` and
    qualify; the walk stops at the first log that does not.
    """
    today = today or date.today()
    ordered = sorted(dedupe_logs(logs), key=lambda log: log.day, reverse=True)

    streak = 0
    for offset, log in enumerate(ordered):
        if log.day == today - timedelta(days=offset) and qualifies(log):
            streak += 1
        else:
            break
    return streak


def calculate_streak(logs: Iterable[DailyLog], today: date | None = None) -> int:
    """Number of consecutive completed days ending today.

    Today must itself be completed: a missing or unfinished log for today
    gives 0 whatever came before.

    Args:
        logs: Logs in any order.
        today: Day the streak ends on (defaults to today).

    Returns:
        Streak length in days.
    """
    return _walk_streak(logs, lambda log: log.completed, today)


def calculate_habit_streak(
    logs: Iterable[DailyLog], habit_key: str, today: date | None = None
) -> int:
    """Number of consecutive days ending today on which a habit was done."""
    return _walk_streak(
        logs, lambda log: bool(log.habits) and log.habits.get(habit_key) is True, today
    )


def habit_keys(logs: Iterable[DailyLog]) -> list[str]:
    """Every habit key that appears in the logs, sorted."""
    keys: set[str] = set()
    for log in logs:
        if log.habits:
            keys.update(log.habits)
    return sorted(keys)


def calculate_habit_streaks(
    logs: Iterable[DailyLog],
    today: date | None = None,
    keys: Iterable[str] | None = None,
) -> dict[str, int]:
    """Streak for each habit.

    Args:
        logs: Logs in any order.
        today: Day the streaks end on (defaults to today).
        keys: Habits to report (defaults to every key seen in the logs).

    Returns:
        Mapping of habit key to streak length.
    """
    logs = list(logs)
    keys = habit_keys(logs) if keys is None else list(keys)
    streaks = {key: calculate_habit_streak(logs, key, today) for key in keys}
    logger.debug("Calculated habit streaks", habits=len(streaks))
    return streaks
