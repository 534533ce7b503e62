"""Tests for the exercise history log."""

import datetime

from app.primal.history import entries_on, history_statistics, make_history_entry, next_history_id
from app.schemas.history import ExerciseHistoryEntry

NOW = datetime.datetime(2026, 10, 20, 12, 0)


def _make_entry(name: str, at: datetime.datetime, entry_id: str | None = None) -> ExerciseHistoryEntry:
    return ExerciseHistoryEntry(id=entry_id or str(int(at.timestamp() * 1000)),
                                exercise_id=name.lower().replace(" ", "_"), exercise_name=name, completed_at=at)


class TestHistoryIds:
    def test_millisecond_timestamp(self):
        assert next_history_id([], NOW) == str(int(NOW.timestamp() * 1000))

    def test_bumped_past_collisions(self):
        first = make_history_entry([], "push_up", "Push-Up", NOW)
        second = make_history_entry([first], "push_up", "Push-Up", NOW)
        third = make_history_entry([first, second], "squat", "Squat", NOW)
        assert len({first.id, second.id, third.id}) == 3
        assert int(third.id) == int(first.id) + 2

    def test_entry_fields(self):
        entry = make_history_entry([], "push_up", "Push-Up", NOW)
        assert entry.exercise_id == "push_up"
        assert entry.completed_at == NOW


class TestHistoryStatistics:
    def test_windows(self):
        history = [
            _make_entry("Push-Up", NOW - datetime.timedelta(days=1)),
            _make_entry("Push-Up", NOW - datetime.timedelta(days=10)),
            _make_entry("Squat", NOW - datetime.timedelta(days=40)),
        ]
        stats = history_statistics(history, NOW)
        assert stats.total_completed == 3
        assert stats.last_7_days == 1
        assert stats.last_30_days == 2

    def test_counts_most_performed_first(self):
        history = [
            _make_entry("Squat", NOW, "1"),
            _make_entry("Push-Up", NOW, "2"),
            _make_entry("Push-Up", NOW, "3"),
            _make_entry("Cat-Cow", NOW, "4"),
        ]
        stats = history_statistics(history, NOW)
        assert stats.counts_by_name == [("Push-Up", 2), ("Cat-Cow", 1), ("Squat", 1)]

    def test_empty(self):
        stats = history_statistics([], NOW)
        assert stats.total_completed == 0
        assert stats.counts_by_name == []

    def test_entries_on_day_newest_first(self):
        history = [
            _make_entry("Squat", NOW.replace(hour=9)),
            _make_entry("Push-Up", NOW.replace(hour=15)),
            _make_entry("Squat", NOW - datetime.timedelta(days=1)),
        ]
        todays = entries_on(history, NOW.date())
        assert [h.exercise_name for h in todays] == ["Push-Up", "Squat"]
