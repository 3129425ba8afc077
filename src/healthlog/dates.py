"""Date identifiers for daily logs.

A daily log is keyed by its calendar day in ``YYYY-MM-DD`` form. The
helpers here convert between days, identifiers and the ISO-8601 strings
stored in each log's ``date`` field.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo


class LogDateError(ValueError):
    """Raised when a log identifier or date string cannot be parsed."""

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid log date {value!r}: {reason}")


def format_date_id(day: date | datetime) -> str:
    """Format a day as a ``YYYY-MM-DD`` log identifier (time of day ignored)."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_log_id(log_id: str) -> date:
    """Parse a ``YYYY-MM-DD`` log identifier back into a date.

    Raises:
        LogDateError: If the identifier is not a valid calendar day.
    """
    parts = log_id.split("-")
    if len(parts) != 3:
        raise LogDateError(log_id, "expected YYYY-MM-DD")
    try:
        year, month, day = (int(part) for part in parts)
    except ValueError as e:
        raise LogDateError(log_id, "non-numeric component") from e
    try:
        return date(year, month, day)
    except ValueError as e:
        raise LogDateError(log_id, str(e)) from e


def get_today_log_id(today: date | None = None) -> str:
    """Identifier of today's log."""
    return format_date_id(today or date.today())


def parse_log_date(value: str) -> date:
    """Calendar day of an ISO-8601 date or datetime string.

    The day is taken as written; offsets are not converted to another
    timezone, so ``2026-10-19T23:30:00-07:00`` is still the 19th.

    Raises:
        LogDateError: If the string is not ISO-8601.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise LogDateError(value, "not an ISO-8601 date") from e


def local_today(timezone: str | None = None) -> date:
    """Current calendar day in an IANA timezone (system local time if unset)."""
    if not timezone:
        return date.today()
    return datetime.now(ZoneInfo(timezone)).date()
