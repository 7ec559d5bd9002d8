"""
Unit tests for Value Objects

Tests:
- TaskStatus helpers
- TimeLogEntry validation, duration and stop()
- ReminderInterval validation and factories
"""
import pytest
from datetime import datetime, timedelta, timezone

from app.core.domain import clock
from app.core.domain.exceptions import InvalidArgumentError
from app.core.domain.value_objects import ReminderInterval, TaskStatus, TimeLogEntry


T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class TestTaskStatus:
    """Test TaskStatus enum"""

    def test_open_statuses(self):
        assert TaskStatus.IN_PROGRESS.is_open()
        assert TaskStatus.PAUSED.is_open()
        assert not TaskStatus.COMPLETED.is_open()
        assert not TaskStatus.ARCHIVED.is_open()

    def test_finished_statuses(self):
        assert TaskStatus.COMPLETED.is_finished()
        assert TaskStatus.ARCHIVED.is_finished()
        assert not TaskStatus.PAUSED.is_finished()

    def test_status_from_string(self):
        assert TaskStatus("paused") == TaskStatus.PAUSED


class TestTimeLogEntry:
    """Test TimeLogEntry value object"""

    def test_open_entry_is_active(self):
        entry = TimeLogEntry(T0)
        assert entry.is_active
        assert entry.end_time is None

    def test_closed_entry_duration(self):
        entry = TimeLogEntry(T0, T0 + timedelta(minutes=25))
        assert not entry.is_active
        assert entry.duration == timedelta(minutes=25)

    def test_open_entry_duration_counts_up_to_now(self, monkeypatch):
        monkeypatch.setattr(clock, "utcnow", lambda: T0 + timedelta(minutes=10))
        assert TimeLogEntry(T0).duration == timedelta(minutes=10)

    def test_end_before_start_rejected(self):
        with pytest.raises(InvalidArgumentError, match="End time cannot be before start time"):
            TimeLogEntry(T0, T0 - timedelta(seconds=1))

    def test_zero_length_entry_allowed(self):
        assert TimeLogEntry(T0, T0).duration == timedelta(0)

    def test_stop_returns_new_entry(self):
        entry = TimeLogEntry(T0)
        stopped = entry.stop(T0 + timedelta(hours=1))

        assert stopped is not entry
        assert stopped.end_time == T0 + timedelta(hours=1)
        assert stopped.start_time == T0
        # Original unchanged
        assert entry.is_active
        assert entry.end_time is None

    def test_stop_before_start_rejected(self):
        with pytest.raises(InvalidArgumentError):
            TimeLogEntry(T0).stop(T0 - timedelta(minutes=1))

    def test_entry_is_immutable(self):
        entry = TimeLogEntry(T0)
        with pytest.raises(AttributeError):
            entry.end_time = T0

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            TimeLogEntry(T0, T0 - timedelta(days=1))


class TestReminderInterval:
    """Test ReminderInterval value object"""

    def test_default_is_one_hour(self):
        interval = ReminderInterval.default()
        assert interval.duration == timedelta(hours=1)
        assert not interval.is_per_task_override

    def test_from_minutes(self):
        interval = ReminderInterval.from_minutes(15, is_per_task_override=True)
        assert interval.duration == timedelta(minutes=15)
        assert interval.is_per_task_override

    def test_from_hours(self):
        assert ReminderInterval.from_hours(2).duration == timedelta(hours=2)

    @pytest.mark.parametrize("duration", [timedelta(0), timedelta(seconds=-5)])
    def test_non_positive_rejected(self, duration):
        with pytest.raises(InvalidArgumentError, match="Reminder interval must be positive"):
            ReminderInterval(duration)

    def test_equality_by_value(self):
        assert ReminderInterval.from_minutes(30) == ReminderInterval(timedelta(minutes=30))

    def test_str(self):
        assert str(ReminderInterval.from_minutes(45)) == "every 45 minutes"
