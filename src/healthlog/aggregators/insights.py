"""Heuristic insights over the most recent week of logs."""

from collections.abc import Sequence

import structlog

from healthlog.models.daily_log import DailyLog

logger = structlog.get_logger()

INSIGHT_WINDOW = 7
MIN_SLEEP_MINUTES = 360
HIGH_STRESS = 4
POOR_SLEEP_QUALITY = 6
MIN_STRESSED_POOR_SLEEP_DAYS = 2
MIN_EXERCISE_DAYS = 3

LOW_SLEEP_INSIGHT = "Your average sleep is below 6 hours. Consider an earlier bedtime routine."
STRESS_SLEEP_INSIGHT = (
    "High stress appears to be affecting your sleep quality. "
    "Try relaxation techniques before bed."
)
LOW_EXERCISE_INSIGHT = (
    "You exercised less than 3 times this week. Aim for at least 150 minutes weekly."
)


def _average_sleep(logs: Sequence[DailyLog]) -> float:
    # Days with no sleep reported count towards the divisor
    if not logs:
        return 0.0
    total = sum(
        log.sleep.time_asleep
        for log in logs
        if log.sleep is not None and log.sleep.time_asleep is not None
    )
    return total / len(logs)


def _stress(log: DailyLog) -> float:
    return (log.mindset.stress if log.mindset else None) or 0


def _sleep_quality(log: DailyLog) -> float:
    return (log.sleep.quality if log.sleep else None) or 10


def _exercise_minutes(log: DailyLog) -> float:
    return (log.exercise.minutes if log.exercise else None) or 0


def generate_insights(logs: Sequence[DailyLog]) -> list[str]:
    """Flag simple patterns in the last seven logs.

    Rules are checked in a fixed order: short sleep, high stress next to
    poor sleep, then too few exercise days.

    Args:
        logs: Logs ordered oldest first; only the last seven are used.

    Returns:
        Insight messages, possibly empty.
    """
    recent = list(logs)[-INSIGHT_WINDOW:]
    insights: list[str] = []

    if _average_sleep(recent) < MIN_SLEEP_MINUTES:
        insights.append(LOW_SLEEP_INSIGHT)

    high_stress_days = [log for log in recent if _stress(log) >= HIGH_STRESS]
    poor_sleep_after_stress = [
        log for log in high_stress_days if _sleep_quality(log) < POOR_SLEEP_QUALITY
    ]
    if len(poor_sleep_after_stress) >= MIN_STRESSED_POOR_SLEEP_DAYS:
        insights.append(STRESS_SLEEP_INSIGHT)

    exercise_days = sum(1 for log in recent if _exercise_minutes(log) > 0)
    if exercise_days < MIN_EXERCISE_DAYS:
        insights.append(LOW_EXERCISE_INSIGHT)

    logger.debug("Generated insights", window=len(recent), insights=len(insights))
    return insights
