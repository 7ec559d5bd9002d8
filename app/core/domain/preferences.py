"""
UserPreferences Entity

Configuration chosen during onboarding and adjustable at any time.
Read-only input for the reminder scheduler.
"""

from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Optional
from uuid import UUID, uuid4

from . import clock
from .exceptions import InvalidArgumentError
from .value_objects import ReminderInterval

DEFAULT_IDLE_CHECK_IN_THRESHOLD = timedelta(minutes=5)
DEFAULT_WAKE_WORD = "Hey Focus"


@dataclass(eq=False)
class UserPreferences:
    default_reminder_interval: ReminderInterval = field(default_factory=ReminderInterval.default)
    idle_check_in_threshold: timedelta = DEFAULT_IDLE_CHECK_IN_THRESHOLD
    automatic_reflection_time: Optional[time] = None
    wake_word: str = DEFAULT_WAKE_WORD
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: clock.utcnow())
    updated_at: datetime = field(default_factory=lambda: clock.utcnow())

    def __post_init__(self):
        self.wake_word = self._validate_wake_word(self.wake_word)
        self._validate_threshold(self.idle_check_in_threshold)

    def set_default_reminder_interval(self, interval: ReminderInterval):
        if interval is None:
            raise InvalidArgumentError("Reminder interval is required.")

        self.default_reminder_interval = interval
        self._touch()

    def set_idle_check_in_threshold(self, threshold: timedelta):
        self._validate_threshold(threshold)
        self.idle_check_in_threshold = threshold
        self._touch()

    def set_automatic_reflection_time(self, value: Optional[time]):
        self.automatic_reflection_time = value
        self._touch()

    def set_wake_word(self, wake_word: str):
        self.wake_word = self._validate_wake_word(wake_word)
        self._touch()

    def _touch(self):
        self.updated_at = clock.utcnow()

    @staticmethod
    def _validate_wake_word(wake_word: str) -> str:
        if not wake_word or not wake_word.strip():
            raise InvalidArgumentError("Wake word cannot be empty.")
        return wake_word.strip()

    @staticmethod
    def _validate_threshold(threshold: timedelta):
        if threshold <= timedelta(0):
            raise InvalidArgumentError("Idle threshold must be positive.")
