"""Daily log records and per-user log settings.

Documents are stored with camelCase keys (``timeAsleep``, ``userId``);
the models accept those aliases as well as the snake_case field names.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel

from healthlog.dates import format_date_id, parse_log_date, parse_log_id


class _LogModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SleepMetrics(_LogModel):
    """Sleep for the night before the logged day (minutes)."""

    time_in_bed: float | None = Field(default=None, ge=0, le=1440)
    time_asleep: float | None = Field(default=None, ge=0, le=1440)
    quality: float | None = Field(default=None, ge=1, le=10)
    wake_time: str | None = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")


class ExerciseMetrics(_LogModel):
    """Exercise for the day."""

    minutes: float | None = Field(default=None, ge=0, le=480)
    intensity: Literal["low", "medium", "high"] | None = None
    steps: int | None = Field(default=None, ge=0)


class NutritionMetrics(_LogModel):
    """Meals, hydration and alcohol."""

    meals: int | None = Field(default=None, ge=0, le=10)
    hydration_oz: float | None = Field(default=None, ge=0)
    alcohol_drinks: float | None = Field(default=None, ge=0)


class RecoveryMetrics(_LogModel):
    """Perceived exertion, soreness and heart metrics."""

    rpe: float | None = Field(default=None, ge=1, le=10)
    soreness: float | None = Field(default=None, ge=1, le=5)
    resting_hr: float | None = Field(default=None, ge=30, le=200)
    hrv: float | None = Field(default=None, ge=0, le=200)


class MindsetMetrics(_LogModel):
    """Mood and stress on a 1-5 scale."""

    mood: float | None = Field(default=None, ge=1, le=5)
    stress: float | None = Field(default=None, ge=1, le=5)


class DailyLog(_LogModel):
    """One user's health log for one calendar day.

    ``id`` is the ``YYYY-MM-DD`` form of ``date``. Any measurement may be
    missing, which means "not reported" rather than zero. ``completed`` is
    set explicitly by the user when they finish the day.
    """

    id: str
    user_id: str
    date: str

    sleep: SleepMetrics | None = None
    exercise: ExerciseMetrics | None = None
    nutrition: NutritionMetrics | None = None
    recovery: RecoveryMetrics | None = None
    mindset: MindsetMetrics | None = None
    habits: dict[str, StrictBool] | None = None
    notes: str | None = Field(default=None, max_length=200)

    completed: bool = False
    source: Literal["manual", "wearable", "mixed"] = "manual"
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sync_status: Literal["synced", "pending", "error"] | None = None

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        parse_log_id(value)
        return value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        parse_log_date(value)
        return value

    @model_validator(mode="after")
    def _id_matches_date(self) -> "DailyLog":
        expected = format_date_id(parse_log_date(self.date))
        if self.id != expected:
            raise ValueError(f"id {self.id} does not match date {self.date} ({expected})")
        return self

    @property
    def day(self) -> date:
        """Calendar day this log belongs to."""
        return parse_log_id(self.id)


class VisibleFields(_LogModel):
    """Which field groups the log form shows."""

    sleep: bool = True
    exercise: bool = True
    nutrition: bool = True
    recovery: bool = True
    mindset: bool = True
    habits: bool = True
    notes: bool = True


class HabitDefinition(_LogModel):
    """A user-defined daily habit checkbox."""

    key: str
    label: str
    icon: str | None = None
    category: Literal["health", "fitness", "nutrition", "mindfulness", "other"] | None = None


class Units(_LogModel):
    """Display units."""

    hydration: Literal["oz", "ml", "cups"] = "oz"
    distance: Literal["miles", "km"] = "miles"
    weight: Literal["lbs", "kg"] = "lbs"


class LogPreset(_LogModel):
    """Values pre-filled into every new day's log."""

    sleep: SleepMetrics | None = None
    exercise: ExerciseMetrics | None = None
    nutrition: NutritionMetrics | None = None
    recovery: RecoveryMetrics | None = None
    mindset: MindsetMetrics | None = None
    habits: dict[str, StrictBool] | None = None
    notes: str | None = Field(default=None, max_length=200)
    source: Literal["manual", "wearable", "mixed"] | None = None


class DefaultValues(_LogModel):
    """How a new day's log is pre-filled."""

    copy_from_yesterday: bool = False
    preset_values: LogPreset | None = None


class DailyLogSettings(_LogModel):
    """Per-user settings for the daily log."""

    visible_fields: VisibleFields | None = None
    habit_definitions: list[HabitDefinition] | None = None
    units: Units | None = None
    default_values: DefaultValues | None = None

    def habit_label(self, key: str) -> str:
        """Label of a habit, falling back to its key."""
        for habit in self.habit_definitions or []:
            if habit.key == key:
                return habit.label
        return key


# Groups carried over when a new log copies yesterday's values
_COPIED_GROUPS = ("sleep", "exercise", "nutrition", "recovery", "mindset", "habits")


def start_log(
    user_id: str,
    day: date,
    settings: DailyLogSettings | None = None,
    yesterday: DailyLog | None = None,
    now: datetime | None = None,
) -> DailyLog:
    """Create the not-yet-completed log a user starts the day with.

    Args:
        user_id: Owner of the log.
        day: Day being logged.
        settings: User settings; their default values decide pre-filling.
        yesterday: Previous day's log, copied when the user asked for it.
        now: Creation time (defaults to the current time).

    Returns:
        A new ``DailyLog`` with ``completed=False``.
    """
    now = now or datetime.now()
    log_id = format_date_id(day)
    defaults = settings.default_values if settings else None

    values: dict[str, Any] = {}
    if defaults and defaults.copy_from_yesterday and yesterday is not None:
        for group in _COPIED_GROUPS:
            value = getattr(yesterday, group)
            if value is not None:
                values[group] = value.model_copy() if isinstance(value, BaseModel) else dict(value)
    elif defaults and defaults.preset_values is not None:
        values = defaults.preset_values.model_dump(exclude_none=True)

    values.update(
        id=log_id,
        user_id=user_id,
        date=log_id,
        completed=False,
        created_at=now,
        updated_at=now,
    )
    values.setdefault("source", "manual")
    return DailyLog.model_validate(values)
