"""
Reminder Scheduler - Derive idle check-ins and paused-task reminders
Implements: Single Responsibility Principle (SRP)

Reads aggregate state through TaskTrackingService and preferences through
PreferencesRepository; never writes to storage.
"""
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Set
from uuid import UUID

from ..domain import clock
from ..domain.focus_task import FocusTask
from ..domain.preferences import DEFAULT_IDLE_CHECK_IN_THRESHOLD
from ..domain.value_objects import DEFAULT_REMINDER_DURATION
from ..repositories.preferences_repo import PreferencesRepository
from .task_tracking_service import TaskTrackingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PausedTaskReminder:
    """A paused task that is overdue for attention"""
    task_name: str
    task_id: UUID
    paused_duration: timedelta
    reminder_interval: timedelta

    def describe(self) -> str:
        minutes = int(self.paused_duration.total_seconds() // 60)
        return f"'{self.task_name}' (paused {minutes}m)"


class ReminderScheduler:
    """
    Tracks idle time and paused-task durations

    Mutable state (last interaction, focus suppression, escalation marks) is
    touched by the voice loop and the reminder worker, so it lives behind a
    lock. Preference fetches happen outside the lock.

    Escalating suppression: a task reminded twice without the user acting on
    it is skipped for the rest of the session.
    """

    def __init__(
        self,
        tracking: TaskTrackingService,
        preferences_repo: PreferencesRepository,
        now: Optional[Callable[[], datetime]] = None
    ):
        self.tracking = tracking
        self.preferences_repo = preferences_repo
        self._now = now or clock.utcnow
        self._lock = threading.Lock()
        self._last_interaction = self._now()
        self._focus_suppressed = False
        self._reminded_task_ids: Set[UUID] = set()
        self._suppressed_task_ids: Set[UUID] = set()

    # ========== Interaction state ==========

    def record_interaction(self):
        """
        Reset the idle timer

        Also forgets escalation marks for the task now in progress, since
        the user acted on it.
        """
        current = self.tracking.get_current_task()
        with self._lock:
            self._last_interaction = self._now()
            if current is not None:
                self._reminded_task_ids.discard(current.id)
                self._suppressed_task_ids.discard(current.id)

    def get_idle_time(self) -> timedelta:
        with self._lock:
            last = self._last_interaction
        return max(self._now() - last, timedelta(0))

    def suppress_during_focus(self):
        with self._lock:
            self._focus_suppressed = True

    def resume_focus_reminders(self):
        with self._lock:
            self._focus_suppressed = False

    @property
    def is_suppressed(self) -> bool:
        with self._lock:
            return self._focus_suppressed

    def acknowledge_reminder(self, task_id: UUID):
        """
        Mark a reminder as delivered

        First acknowledgement records it, the second suppresses the task
        until reset_suppression() or the user switches to it.
        """
        with self._lock:
            if task_id in self._reminded_task_ids:
                self._suppressed_task_ids.add(task_id)
                logger.debug(f"[REMINDER] Suppressing task {task_id} for this session")
            else:
                self._reminded_task_ids.add(task_id)

    def reset_suppression(self):
        with self._lock:
            self._reminded_task_ids.clear()
            self._suppressed_task_ids.clear()

    # ========== Due checks ==========

    async def is_idle_check_in_due(self) -> bool:
        """
        True when nothing is in progress and the user has been idle at
        least the configured threshold
        """
        prefs = await self.preferences_repo.get()
        threshold = prefs.idle_check_in_threshold if prefs else DEFAULT_IDLE_CHECK_IN_THRESHOLD

        if self.is_suppressed:
            return False

        if self.tracking.get_current_task() is not None:
            return False

        return self.get_idle_time() >= threshold

    async def get_due_reminders(self) -> List[PausedTaskReminder]:
        """
        Paused tasks whose time since pausing reached their interval

        Per-task override wins over the preferences default, which falls
        back to one hour when no preferences are stored.
        """
        if self.is_suppressed:
            return []

        prefs = await self.preferences_repo.get()
        default_interval = (
            prefs.default_reminder_interval.duration if prefs else DEFAULT_REMINDER_DURATION
        )

        with self._lock:
            suppressed = set(self._suppressed_task_ids)

        now = self._now()
        reminders = []
        for task in self.tracking.get_paused_tasks():
            if task.id in suppressed:
                continue

            paused_duration = self._paused_duration(task, now)
            if paused_duration is None:
                continue

            interval = task.reminder_interval.duration if task.reminder_interval else default_interval
            if paused_duration >= interval:
                reminders.append(PausedTaskReminder(
                    task_name=task.name,
                    task_id=task.id,
                    paused_duration=paused_duration,
                    reminder_interval=interval
                ))

        if reminders:
            logger.debug(f"[REMINDER] {len(reminders)} paused task(s) due")
        return reminders

    @staticmethod
    def _paused_duration(task: FocusTask, now: datetime) -> Optional[timedelta]:
        """None when the task has never been paused (no closed entry)"""
        stopped_at = task.last_stopped_at
        if stopped_at is None:
            return None
        return now - stopped_at
