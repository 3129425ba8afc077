"""Week-over-week averages and trend badges."""

import math
from collections.abc import Callable, Iterable
from datetime import date, datetime, timedelta
from typing import Literal

import structlog
from pydantic import BaseModel

from healthlog.models.daily_log import DailyLog

logger = structlog.get_logger()

# Percent change beyond which a metric counts as moving up or down
TREND_THRESHOLD_PERCENT = 5

TrendDirection = Literal["up", "down", "stable"]


class MetricAverages(BaseModel):
    """Average of each tracked metric, None when nothing was reported."""

    sleep: float | None = None
    exercise: float | None = None
    mood: float | None = None
    stress: float | None = None


class WeeklyAverages(BaseModel):
    """Averages for the current and the previous week."""

    this_week: MetricAverages
    last_week: MetricAverages


class Trend(BaseModel):
    """Direction and rounded percent change of a metric."""

    direction: TrendDirection = "stable"
    change_percent: int = 0


_METRICS: dict[str, Callable[[DailyLog], float | None]] = {
    "sleep": lambda log: log.sleep.time_asleep if log.sleep else None,
    "exercise": lambda log: log.exercise.minutes if log.exercise else None,
    "mood": lambda log: log.mindset.mood if log.mindset else None,
    "stress": lambda log: log.mindset.stress if log.mindset else None,
}


def _average(logs: list[DailyLog], getter: Callable[[DailyLog], float | None]) -> float | None:
    values = [value for value in map(getter, logs) if value is not None]
    if not values:
        return None
    return sum(values) / len(values)


def _metric_averages(logs: list[DailyLog]) -> MetricAverages:
    return MetricAverages(**{name: _average(logs, getter) for name, getter in _METRICS.items()})


def calculate_weekly_averages(
    logs: Iterable[DailyLog], now: datetime | date | None = None
) -> WeeklyAverages:
    """Average sleep, exercise, mood and stress this week and last week.

    Each week is seven calendar days: this week runs from ``today - 6``
    through today (and any later day), last week from ``today - 13``
    through ``today - 7``. Unreported values are left out of the average
    instead of counting as zero.

    Args:
        logs: Logs in any order.
        now: Current moment or day (defaults to now).

    Returns:
        ``WeeklyAverages`` for both weeks.
    """
    now = now or datetime.now()
    today = now.date() if isinstance(now, datetime) else now
    week_ago = today - timedelta(days=7)
    two_weeks_ago = today - timedelta(days=14)

    logs = list(logs)
    this_week = [log for log in logs if log.day > week_ago]
    last_week = [log for log in logs if two_weeks_ago < log.day <= week_ago]

    logger.debug(
        "Partitioned logs by week",
        this_week=len(this_week),
        last_week=len(last_week),
    )
    return WeeklyAverages(
        this_week=_metric_averages(this_week),
        last_week=_metric_averages(last_week),
    )


def calculate_trend(this_week: float | None, last_week: float | None) -> Trend:
    """Classify the change between two weekly averages.

    Either side missing or zero is reported as stable with no change.
    """
    if not this_week or not last_week:
        return Trend()

    change = (this_week - last_week) / last_week * 100
    if change > TREND_THRESHOLD_PERCENT:
        direction: TrendDirection = "up"
    elif change < -TREND_THRESHOLD_PERCENT:
        direction = "down"
    else:
        direction = "stable"
    # Round half up, so +2.5% shows as +3%
    return Trend(direction=direction, change_percent=math.floor(change + 0.5))


def calculate_weekly_trends(averages: WeeklyAverages) -> dict[str, Trend]:
    """Trend of every metric from this week's and last week's averages."""
    return {
        name: calculate_trend(
            getattr(averages.this_week, name), getattr(averages.last_week, name)
        )
        for name in _METRICS
    }
