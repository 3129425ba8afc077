"""Dashboard summary combining streaks, trends and insights."""

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any

import structlog

from healthlog.aggregators.insights import generate_insights
from healthlog.aggregators.streaks import (
    calculate_habit_streaks,
    calculate_streak,
    dedupe_logs,
    habit_keys,
)
from healthlog.aggregators.trends import calculate_weekly_averages, calculate_weekly_trends
from healthlog.dates import format_date_id
from healthlog.models.daily_log import DailyLog, DailyLogSettings, start_log

logger = structlog.get_logger()


def completion_percentage(log: DailyLog | None) -> float:
    """Share of the five headline fields filled in for a day, as a percentage."""
    if log is None:
        return 0.0

    fields = [
        log.sleep.time_asleep if log.sleep else None,
        log.exercise.minutes if log.exercise else None,
        log.nutrition.hydration_oz if log.nutrition else None,
        log.recovery.rpe if log.recovery else None,
        log.mindset.mood if log.mindset else None,
    ]
    filled = sum(1 for value in fields if value is not None)
    return filled * 100 / len(fields)


class DailyLogAggregator:
    """Aggregates a user's daily logs into dashboard metrics.

    Combines:
    - Completion streak
    - Habit streaks (defined habits first, then any others logged)
    - Weekly averages with trend badges
    - Insights for the last week
    - Today's completion
    """

    def __init__(
        self, logs: Iterable[DailyLog], settings: DailyLogSettings | None = None
    ) -> None:
        # Oldest first, one log per day
        self.logs = sorted(dedupe_logs(logs), key=lambda log: log.day)
        self.settings = settings or DailyLogSettings()

    def get_log(self, day: date) -> DailyLog | None:
        """Log for a given day, if there is one."""
        for log in self.logs:
            if log.day == day:
                return log
        return None

    def get_habit_keys(self) -> list[str]:
        """Defined habits in their configured order, then undefined ones seen in logs."""
        keys = [habit.key for habit in self.settings.habit_definitions or []]
        keys.extend(key for key in habit_keys(self.logs) if key not in keys)
        return keys

    def get_summary(self, today: date | None = None) -> dict[str, Any]:
        """Get the dashboard summary for a day.

        Args:
            today: Day the summary is for (defaults to today).

        Returns:
            Streaks, today's progress, weekly averages, trends and insights.
        """
        today = today or date.today()
        today_log = self.get_log(today)

        habit_streaks = calculate_habit_streaks(self.logs, today, self.get_habit_keys())
        averages = calculate_weekly_averages(self.logs, today)
        trends = calculate_weekly_trends(averages)

        summary: dict[str, Any] = {
            "date": today.isoformat(),
            "log_count": len(self.logs),
            "streak": calculate_streak(self.logs, today),
            "habit_streaks": {
                key: {"label": self.settings.habit_label(key), "streak": streak}
                for key, streak in habit_streaks.items()
            },
            "today": {
                "log_id": format_date_id(today),
                "logged": today_log is not None,
                "completed": bool(today_log and today_log.completed),
                "completion_percentage": completion_percentage(today_log),
            },
            "weekly_averages": averages.model_dump(),
            "trends": {name: trend.model_dump() for name, trend in trends.items()},
            "insights": generate_insights(self.logs),
        }

        logger.info(
            "Built daily log summary",
            date=summary["date"],
            logs=summary["log_count"],
            streak=summary["streak"],
        )
        return summary

    def start_log(
        self, user_id: str, today: date | None = None, now: datetime | None = None
    ) -> DailyLog:
        """Today's log if it exists, otherwise a new one pre-filled per settings."""
        today = today or date.today()
        existing = self.get_log(today)
        if existing is not None:
            return existing
        yesterday = self.get_log(today - timedelta(days=1))
        return start_log(user_id, today, self.settings, yesterday=yesterday, now=now)


# Convenience function
def get_log_summary(
    logs: Iterable[DailyLog],
    settings: DailyLogSettings | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    """Get the dashboard summary for a set of logs."""
    return DailyLogAggregator(logs, settings).get_summary(today)
