"""
FocusTask Entity

A unit of work the user is tracking. Owns its status state machine
and its ordered list of time log entries.

Invariant: at most one TimeLogEntry in time_logs is active.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID, uuid4

from . import clock
from .exceptions import InvalidArgumentError, InvalidOperationError, InvalidStateError
from .value_objects import ReminderInterval, TaskStatus, TimeLogEntry


@dataclass(eq=False)
class FocusTask:
    """
    Entity identified by id

    A freshly constructed task is IN_PROGRESS; the aggregate decides
    which task gets focus.
    """
    name: str
    id: UUID = field(default_factory=uuid4)
    status: TaskStatus = TaskStatus.IN_PROGRESS
    created_at: datetime = field(default_factory=lambda: clock.utcnow())
    priority_ranking: Optional[int] = None
    reminder_interval: Optional[ReminderInterval] = None
    time_logs: List[TimeLogEntry] = field(default_factory=list)
    note_ids: List[UUID] = field(default_factory=list)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise InvalidArgumentError("Task name cannot be empty.")
        self.name = self.name.strip()

        if isinstance(self.status, str):
            self.status = TaskStatus(self.status)

    def __eq__(self, other) -> bool:
        return isinstance(other, FocusTask) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    # ========== State transitions ==========

    def start(self):
        if self.status.is_finished():
            raise InvalidStateError(f"Cannot start a {self.status.value} task.")

        self.status = TaskStatus.IN_PROGRESS
        self.time_logs.append(TimeLogEntry(clock.utcnow()))

    def pause(self):
        if self.status != TaskStatus.IN_PROGRESS:
            raise InvalidStateError(f"Cannot pause a task that is {self.status.value}.")

        self.status = TaskStatus.PAUSED
        self._stop_active_time_log()

    def complete(self):
        if self.status.is_finished():
            raise InvalidStateError(f"Task is already {self.status.value}.")

        self.status = TaskStatus.COMPLETED
        self._stop_active_time_log()

    def archive(self):
        if self.status == TaskStatus.ARCHIVED:
            raise InvalidStateError("Task is already archived.")

        self.status = TaskStatus.ARCHIVED
        self._stop_active_time_log()

    # ========== Attributes ==========

    def rename(self, new_name: str):
        # No uniqueness check here, the aggregate resolves names first-match
        if not new_name or not new_name.strip():
            raise InvalidArgumentError("Task name cannot be empty.")

        self.name = new_name.strip()

    def set_priority(self, ranking: int):
        if ranking < 1:
            raise InvalidArgumentError("Priority ranking must be positive.")

        self.priority_ranking = ranking

    def set_reminder_interval(self, interval: ReminderInterval):
        if interval is None:
            raise InvalidArgumentError("Reminder interval is required.")

        self.reminder_interval = interval

    def clear_reminder_interval(self):
        self.reminder_interval = None

    def add_note_id(self, note_id: UUID):
        self.note_ids.append(note_id)

    def merge_from(self, other: 'FocusTask'):
        """
        Absorb another task's notes and time logs

        Overlapping active entries are not reconciled; callers pause
        one side first.
        """
        if other is None:
            raise InvalidArgumentError("Task to merge is required.")
        if other.id == self.id:
            raise InvalidOperationError("Cannot merge a task with itself.")

        self.note_ids.extend(other.note_ids)
        self.time_logs.extend(other.time_logs)

    # ========== Queries ==========

    @property
    def active_time_log(self) -> Optional[TimeLogEntry]:
        return next((t for t in reversed(self.time_logs) if t.is_active), None)

    @property
    def last_stopped_at(self) -> Optional[datetime]:
        """End of the most recently closed entry, None if nothing was closed"""
        return max((t.end_time for t in self.time_logs if not t.is_active), default=None)

    def get_time_spent_today(self) -> timedelta:
        today = clock.utcnow().date()
        return sum(
            (t.duration for t in self.time_logs if t.start_time.date() == today),
            timedelta(0)
        )

    def get_total_time_spent(self) -> timedelta:
        return sum((t.duration for t in self.time_logs), timedelta(0))

    def _stop_active_time_log(self):
        for index in range(len(self.time_logs) - 1, -1, -1):
            if self.time_logs[index].is_active:
                self.time_logs[index] = self.time_logs[index].stop(clock.utcnow())
                return

    def __str__(self) -> str:
        return f"FocusTask(name={self.name!r}, status={self.status.value})"

    def __repr__(self) -> str:
        return self.__str__()
