"""Daily log data model."""

from healthlog.models.daily_log import (
    DailyLog,
    DailyLogSettings,
    DefaultValues,
    ExerciseMetrics,
    HabitDefinition,
    LogPreset,
    MindsetMetrics,
    NutritionMetrics,
    RecoveryMetrics,
    SleepMetrics,
    Units,
    VisibleFields,
    start_log,
)

__all__ = [
    "DailyLog",
    "DailyLogSettings",
    "DefaultValues",
    "ExerciseMetrics",
    "HabitDefinition",
    "LogPreset",
    "MindsetMetrics",
    "NutritionMetrics",
    "RecoveryMetrics",
    "SleepMetrics",
    "Units",
    "VisibleFields",
    "start_log",
]
