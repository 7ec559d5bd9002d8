"""
Task Tracking Service - Orchestrate the task aggregate and persistence
Implements: Single Responsibility Principle (SRP)
"""
import logging
import threading
from typing import List, Optional, Set
from uuid import UUID

from ..domain.events import DomainEvent
from ..domain.exceptions import TaskNotFoundError
from ..domain.focus_task import FocusTask
from ..domain.task_aggregate import TaskAggregate
from ..domain.value_objects import ReminderInterval
from ..domain.work_session import WorkSession
from ..repositories.session_repo import SessionRepository
from ..repositories.task_repo import TaskRepository

logger = logging.getLogger(__name__)


class TaskTrackingService:
    """
    Central service for the task lifecycle

    Wraps the TaskAggregate behind a re-entrant lock so the command loop and
    the reminder worker can share it. The lock is never held across an await:
    save() snapshots the collection first, then talks to storage.
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        session_repo: SessionRepository
    ):
        self.task_repo = task_repo
        self.session_repo = session_repo
        self._aggregate = TaskAggregate()
        self._current_session: Optional[WorkSession] = None
        self._removed_task_ids: Set[UUID] = set()
        self._lock = threading.RLock()

    async def initialize(self):
        """
        Load tasks and start (or resume) a work session

        This is the only place storage is read on startup.
        """
        tasks = await self.task_repo.get_all()
        with self._lock:
            self._aggregate.load_tasks(tasks)
            self._removed_task_ids.clear()

        session = await self.session_repo.get_latest()
        if session is None or not session.is_active:
            session = WorkSession()
            await self.session_repo.save(session)
            logger.info(f"[SESSION] Started new work session {session.id}")
        else:
            logger.info(f"[SESSION] Resumed work session {session.id}")

        with self._lock:
            self._current_session = session

        logger.info(f"Loaded {len(tasks)} tasks")

    # ========== Commands ==========

    def create_task(self, name: str) -> FocusTask:
        with self._lock:
            task = self._aggregate.create_task(name)
            self._record_in_session(task)
        logger.info(f"Created task '{task.name}'")
        return task

    def switch_task(self, name: str) -> FocusTask:
        with self._lock:
            task = self._aggregate.switch_to_task(name)
            self._record_in_session(task)
        logger.info(f"Now working on '{task.name}'")
        return task

    def complete_task(self, name: Optional[str] = None) -> FocusTask:
        """Complete the named task, or the current one when no name is given"""
        with self._lock:
            if name is not None:
                task = self._aggregate.complete_task(name)
            else:
                task = self._aggregate.complete_current_task()
        logger.info(f"Completed task '{task.name}'")
        return task

    def rename_task(self, old_name: str, new_name: str) -> FocusTask:
        with self._lock:
            return self._aggregate.rename_task(old_name, new_name)

    def delete_task(self, name: str) -> FocusTask:
        with self._lock:
            task = self._aggregate.delete_task(name)
            self._removed_task_ids.add(task.id)
        logger.info(f"Deleted task '{task.name}'")
        return task

    def merge_tasks(self, source_name: str, target_name: str) -> FocusTask:
        with self._lock:
            source = self._aggregate.find_task_by_name(source_name)
            target = self._aggregate.merge_tasks(source_name, target_name)
            self._removed_task_ids.add(source.id)
        logger.info(f"Merged '{source.name}' into '{target.name}'")
        return target

    def attach_note(self, task: FocusTask, note_id: UUID):
        with self._lock:
            task.add_note_id(note_id)

    def archive_tasks(self, tasks: List[FocusTask]):
        """Archive the given tasks; the first illegal transition propagates"""
        with self._lock:
            for task in tasks:
                task.archive()
        logger.info(f"Archived {len(tasks)} task(s)")

    def set_reminder_interval(self, name: str, interval: ReminderInterval) -> FocusTask:
        with self._lock:
            task = self._aggregate.find_task_by_name(name)
            if task is None:
                raise TaskNotFoundError(name)
            task.set_reminder_interval(interval)
        return task

    def set_priorities(self, ordered_names: List[str]) -> List[FocusTask]:
        """
        Rank the named tasks 1..n in order

        Every name is resolved before any ranking changes, so a miss leaves
        all tasks untouched.
        """
        with self._lock:
            tasks = []
            for name in ordered_names:
                task = self._aggregate.find_task_by_name(name)
                if task is None:
                    raise TaskNotFoundError(name)
                tasks.append(task)

            for rank, task in enumerate(tasks, start=1):
                task.set_priority(rank)
        return tasks

    async def save(self):
        """
        Persist the task collection and the current session, then drain the
        events that were part of this save

        Storage errors propagate and the event buffer is kept, so a retry
        by the caller still sees the unsaved events.
        """
        with self._lock:
            tasks = self._aggregate.tasks
            removed = set(self._removed_task_ids)
            session = self._current_session
            saved_events = len(self._aggregate.domain_events)

        await self.task_repo.save_all(tasks)
        for task_id in removed:
            await self.task_repo.delete(task_id)

        if session is not None:
            await self.session_repo.save(session)

        with self._lock:
            # Events raised while storage was busy stay for the next save
            self._aggregate.clear_events(saved_events)
            self._removed_task_ids -= removed

        logger.debug(f"Saved {len(tasks)} tasks")

    async def end_session(self, reflection_summary: Optional[str] = None) -> WorkSession:
        """End the current work session and persist it"""
        with self._lock:
            session = self._current_session
            if session is None:
                session = WorkSession()
                self._current_session = session
            session.end(reflection_summary)

        await self.session_repo.save(session)
        logger.info(f"[SESSION] Ended work session {session.id}")
        return session

    # ========== Queries ==========

    @property
    def current_session(self) -> Optional[WorkSession]:
        return self._current_session

    @property
    def pending_events(self) -> List[DomainEvent]:
        with self._lock:
            return self._aggregate.domain_events

    def get_all_tasks(self) -> List[FocusTask]:
        with self._lock:
            return self._aggregate.tasks

    def get_current_task(self) -> Optional[FocusTask]:
        with self._lock:
            return self._aggregate.current_task

    def get_open_tasks(self) -> List[FocusTask]:
        with self._lock:
            return self._aggregate.get_open_tasks()

    def get_paused_tasks(self) -> List[FocusTask]:
        with self._lock:
            return self._aggregate.get_paused_tasks()

    def get_completed_tasks(self) -> List[FocusTask]:
        with self._lock:
            return self._aggregate.get_completed_tasks()

    def find_task_by_name(self, name: str) -> Optional[FocusTask]:
        with self._lock:
            return self._aggregate.find_task_by_name(name)

    def has_task_with_name(self, name: str) -> bool:
        with self._lock:
            return self._aggregate.has_task_with_name(name)

    def _record_in_session(self, task: FocusTask):
        if self._current_session is not None:
            self._current_session.record_task_worked_on(task.id)
