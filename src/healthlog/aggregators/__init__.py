"""Aggregations over daily logs."""

from healthlog.aggregators.insights import generate_insights
from healthlog.aggregators.streaks import (
    calculate_habit_streak,
    calculate_habit_streaks,
    calculate_streak,
    dedupe_logs,
    habit_keys,
)
from healthlog.aggregators.summary import (
    DailyLogAggregator,
    completion_percentage,
    get_log_summary,
)
from healthlog.aggregators.trends import (
    MetricAverages,
    Trend,
    WeeklyAverages,
    calculate_trend,
    calculate_weekly_averages,
    calculate_weekly_trends,
)

__all__ = [
    "DailyLogAggregator",
    "MetricAverages",
    "Trend",
    "WeeklyAverages",
    "calculate_habit_streak",
    "calculate_habit_streaks",
    "calculate_streak",
    "calculate_trend",
    "calculate_weekly_averages",
    "calculate_weekly_trends",
    "completion_percentage",
    "dedupe_logs",
    "generate_insights",
    "get_log_summary",
    "habit_keys",
]
