"""Tests for completion and habit streaks."""

from datetime import datetime

from healthlog.aggregators.streaks import (
    calculate_habit_streak,
    calculate_habit_streaks,
    calculate_streak,
    dedupe_logs,
    habit_keys,
)


class TestCalculateStreak:
    def test_empty(self, today):
        assert calculate_streak([], today) == 0

    def test_five_completed_days(self, make_log, today):
        logs = [make_log(offset) for offset in range(5)]
        assert calculate_streak(logs, today) == 5

    def test_input_order_does_not_matter(self, make_log, today):
        logs = [make_log(offset) for offset in (3, 0, 4, 1, 2)]
        assert calculate_streak(logs, today) == 5

    def test_stops_at_incomplete_day(self, make_log, today):
        logs = [make_log(0), make_log(1), make_log(2, completed=False), make_log(3)]
        assert calculate_streak(logs, today) == 2

    def test_stops_at_gap(self, make_log, today):
        logs = [make_log(0), make_log(1), make_log(3), make_log(4)]
        assert calculate_streak(logs, today) == 2

    def test_missing_today_is_zero(self, make_log, today):
        logs = [make_log(offset) for offset in range(1, 6)]
        assert calculate_streak(logs, today) == 0

    def test_incomplete_today_is_zero(self, make_log, today):
        logs = [make_log(0, completed=False)] + [make_log(offset) for offset in range(1, 6)]
        assert calculate_streak(logs, today) == 0

    def test_log_after_today_breaks_walk(self, make_log, today):
        logs = [make_log(-1), make_log(0), make_log(1)]
        assert calculate_streak(logs, today) == 0

    def test_duplicate_keeps_latest_update(self, make_log, today):
        stale = make_log(0, completed=False, updatedAt="2026-10-19T07:00:00")
        fresh = make_log(0, completed=True, updatedAt="2026-10-19T21:00:00")
        assert calculate_streak([fresh, stale, make_log(1)], today) == 2
        assert calculate_streak([stale, fresh, make_log(1)], today) == 2

    def test_duplicate_with_later_incomplete_update(self, make_log, today):
        done = make_log(0, completed=True, updatedAt="2026-10-19T07:00:00")
        reopened = make_log(0, completed=False, updatedAt="2026-10-19T21:00:00")
        assert calculate_streak([done, reopened], today) == 0


class TestCalculateHabitStreak:
    def test_empty(self, today):
        assert calculate_habit_streak([], "meditation", today) == 0

    def test_five_days(self, make_log, today):
        logs = [make_log(offset, habits={"meditation": True}) for offset in range(5)]
        assert calculate_habit_streak(logs, "meditation", today) == 5

    def test_stops_when_habit_not_done(self, make_log, today):
        logs = [
            make_log(0, habits={"meditation": True}),
            make_log(1, habits={"meditation": True}),
            make_log(2, habits={"meditation": False}),
            make_log(3, habits={"meditation": True}),
        ]
        assert calculate_habit_streak(logs, "meditation", today) == 2

    def test_missing_key_breaks_streak(self, make_log, today):
        logs = [
            make_log(0, habits={"meditation": True}),
            make_log(1, habits={"journal": True}),
            make_log(2),
        ]
        assert calculate_habit_streak(logs, "meditation", today) == 1

    def test_missing_today_is_zero(self, make_log, today):
        logs = [make_log(offset, habits={"meditation": True}) for offset in range(1, 4)]
        assert calculate_habit_streak(logs, "meditation", today) == 0

    def test_independent_of_completed_flag(self, make_log, today):
        logs = [make_log(offset, completed=False, habits={"meditation": True}) for offset in range(3)]
        assert calculate_habit_streak(logs, "meditation", today) == 3
        assert calculate_streak(logs, today) == 0


class TestHabitStreaks:
    def test_habit_keys_sorted_and_unique(self, make_log):
        logs = [
            make_log(0, habits={"stretch": True, "meditation": False}),
            make_log(1, habits={"meditation": True, "journal": True}),
            make_log(2),
        ]
        assert habit_keys(logs) == ["journal", "meditation", "stretch"]

    def test_streak_per_habit(self, make_log, today):
        logs = [
            make_log(0, habits={"meditation": True, "stretch": True}),
            make_log(1, habits={"meditation": True, "stretch": False}),
        ]
        assert calculate_habit_streaks(logs, today) == {"meditation": 2, "stretch": 1}

    def test_requested_keys_only(self, make_log, today):
        logs = [make_log(0, habits={"meditation": True, "stretch": True})]
        assert calculate_habit_streaks(logs, today, keys=["walk"]) == {"walk": 0}


class TestDedupeLogs:
    def test_keeps_first_seen_order(self, make_log):
        logs = [make_log(2), make_log(0), make_log(1), make_log(0)]
        assert [log.id for log in dedupe_logs(logs)] == ["2026-10-17", "2026-10-19", "2026-10-18"]

    def test_log_without_timestamp_loses(self, make_log):
        timestamped = make_log(0, notes="kept", updatedAt=datetime(2026, 10, 19, 8).isoformat())
        bare = make_log(0, notes="dropped")
        assert dedupe_logs([timestamped, bare])[0].notes == "kept"
        assert dedupe_logs([bare, timestamped])[0].notes == "kept"

    def test_equal_timestamps_later_wins(self, make_log):
        first = make_log(0, notes="first")
        second = make_log(0, notes="second")
        assert dedupe_logs([first, second])[0].notes == "second"
