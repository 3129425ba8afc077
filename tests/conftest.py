"""Pytest configuration and fixtures for healthlog tests."""

import json
from datetime import date, timedelta

import pytest

from healthlog.dates import format_date_id
from healthlog.models.daily_log import DailyLog

TODAY = date(2026, 10, 19)


def make_document(offset: int, user_id: str = "user-1", **fields) -> dict:
    """Log document as stored, for the day ``offset`` days before TODAY."""
    day = TODAY - timedelta(days=offset)
    return {
        "id": format_date_id(day),
        "userId": user_id,
        "date": f"{day.isoformat()}T08:00:00.000Z",
        **fields,
    }


@pytest.fixture
def today():
    """Fixed 'today' shared by all tests."""
    return TODAY


@pytest.fixture
def make_log():
    """Factory for validated logs, ``offset`` days before TODAY."""

    def _make(offset: int = 0, completed: bool = True, **fields) -> DailyLog:
        return DailyLog.model_validate(make_document(offset, completed=completed, **fields))

    return _make


@pytest.fixture
def sample_documents():
    """Ten days of history for user-1.

    Completed 0-2 days ago, unfinished 3 days ago, two logs in the
    previous week.
    """
    return [
        make_document(
            0,
            completed=True,
            sleep={"timeAsleep": 420, "quality": 8},
            exercise={"minutes": 30},
            mindset={"mood": 4, "stress": 2},
            habits={"meditation": True, "stretch": False},
        ),
        make_document(
            1,
            completed=True,
            sleep={"timeAsleep": 400},
            exercise={"minutes": 45},
            habits={"meditation": True, "stretch": True},
        ),
        make_document(2, completed=True, sleep={"timeAsleep": 380}, habits={"meditation": False}),
        make_document(3, completed=False, sleep={"timeAsleep": 300}),
        make_document(9, completed=True, sleep={"timeAsleep": 360}, exercise={"minutes": 20}),
        make_document(10, completed=True, sleep={"timeAsleep": 380}),
    ]


@pytest.fixture
def sample_settings():
    """Exported daily log settings with one defined habit."""
    return {
        "habitDefinitions": [
            {"key": "meditation", "label": "Meditate", "category": "mindfulness"},
        ],
        "defaultValues": {"copyFromYesterday": True},
    }


@pytest.fixture
def export_file(tmp_path, sample_documents, sample_settings):
    """Export file nesting the sample logs under their user."""
    logs = {}
    for doc in sample_documents:
        doc = dict(doc)
        doc.pop("userId")
        logs[doc.pop("id")] = doc

    path = tmp_path / "daily_logs.json"
    path.write_text(
        json.dumps({"userId": "user-1", "logs": logs, "settings": sample_settings})
    )
    return path
