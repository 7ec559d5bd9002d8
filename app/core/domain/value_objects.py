"""
Value Objects

Immutable facts used by the entity layer:
- TaskStatus: lifecycle states of a FocusTask
- TimeLogEntry: a time interval spent on a task
- ReminderInterval: how long a paused task may sit before a reminder
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from . import clock
from .exceptions import InvalidArgumentError


class TaskStatus(str, Enum):
    """
    Task status enum

    InProgress -> Paused | Completed | Archived
    Paused -> InProgress | Completed | Archived
    Completed -> Archived
    """
    IN_PROGRESS = "in_progress"
    PAUSED = "paused"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    def is_open(self) -> bool:
        """Check if task still needs attention"""
        return self in [TaskStatus.IN_PROGRESS, TaskStatus.PAUSED]

    def is_finished(self) -> bool:
        """Check if task can no longer be started"""
        return self in [TaskStatus.COMPLETED, TaskStatus.ARCHIVED]


@dataclass(frozen=True)
class TimeLogEntry:
    """
    Value Object for a work interval

    Active while end_time is None. Stopping returns a new entry,
    the original is never modified.
    """
    start_time: datetime
    end_time: Optional[datetime] = None

    def __post_init__(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise InvalidArgumentError("End time cannot be before start time.")

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    @property
    def duration(self) -> timedelta:
        """Closed entries use their end, open entries count up to now"""
        end = self.end_time if self.end_time is not None else clock.utcnow()
        return end - self.start_time

    def stop(self, end_time: datetime) -> 'TimeLogEntry':
        """
        Close this interval

        Returns:
            New TimeLogEntry instance ending at end_time
        """
        if end_time < self.start_time:
            raise InvalidArgumentError("End time cannot be before start time.")
        return replace(self, end_time=end_time)


@dataclass(frozen=True)
class ReminderInterval:
    """
    Value Object for a reminder interval

    is_per_task_override distinguishes a task-level setting from the
    global default stored in preferences.
    """
    duration: timedelta
    is_per_task_override: bool = False

    def __post_init__(self):
        if self.duration <= timedelta(0):
            raise InvalidArgumentError("Reminder interval must be positive.")

    @classmethod
    def default(cls) -> 'ReminderInterval':
        return cls(DEFAULT_REMINDER_DURATION)

    @classmethod
    def from_minutes(cls, minutes: float, is_per_task_override: bool = False) -> 'ReminderInterval':
        return cls(timedelta(minutes=minutes), is_per_task_override)

    @classmethod
    def from_hours(cls, hours: float, is_per_task_override: bool = False) -> 'ReminderInterval':
        return cls(timedelta(hours=hours), is_per_task_override)

    def __str__(self) -> str:
        minutes = self.duration.total_seconds() / 60
        return f"every {minutes:g} minutes"


DEFAULT_REMINDER_DURATION = timedelta(hours=1)
