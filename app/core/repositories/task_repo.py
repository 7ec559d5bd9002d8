"""
Task Repository

Implementation of repository pattern for FocusTask entities

Implements:
- DIP: Implements abstract BaseRepository
- SRP: Single responsibility (task data access)
- ISP: Provides task-specific lookups (by name, by status)
"""

from datetime import timedelta
from typing import Iterable, List, Optional
from uuid import UUID

from .base import BaseRepository
from ..domain import clock
from ..domain.focus_task import FocusTask
from ..domain.value_objects import ReminderInterval, TaskStatus, TimeLogEntry
from ...models import FocusTask as FocusTaskModel
from ...models import TimeLogEntry as TimeLogEntryModel


def task_from_orm(orm_task: FocusTaskModel) -> FocusTask:
    """
    Convert SQLAlchemy ORM model to domain model

    Builds the entity through its dataclass constructor, bypassing the
    state machine (this is restoration, not behavior).
    """
    reminder = None
    if orm_task.reminder_interval_seconds:
        reminder = ReminderInterval(
            timedelta(seconds=orm_task.reminder_interval_seconds),
            bool(orm_task.reminder_is_override)
        )

    return FocusTask(
        id=UUID(orm_task.id),
        name=orm_task.name,
        status=TaskStatus(orm_task.status),
        created_at=clock.ensure_utc(orm_task.created_at),
        priority_ranking=orm_task.priority_ranking,
        reminder_interval=reminder,
        time_logs=[
            TimeLogEntry(
                start_time=clock.ensure_utc(log.start_time),
                end_time=clock.ensure_utc(log.end_time) if log.end_time else None
            )
            for log in orm_task.time_logs
        ],
        note_ids=[UUID(n) for n in (orm_task.note_ids or [])]
    )


def _apply_to_orm(orm_task: FocusTaskModel, task: FocusTask):
    orm_task.name = task.name
    orm_task.status = task.status.value
    orm_task.created_at = task.created_at
    orm_task.priority_ranking = task.priority_ranking
    if task.reminder_interval is not None:
        orm_task.reminder_interval_seconds = task.reminder_interval.duration.total_seconds()
        orm_task.reminder_is_override = task.reminder_interval.is_per_task_override
    else:
        orm_task.reminder_interval_seconds = None
        orm_task.reminder_is_override = False
    orm_task.note_ids = [str(n) for n in task.note_ids]
    # delete-orphan cascade drops the previous rows
    orm_task.time_logs = [
        TimeLogEntryModel(position=i, start_time=log.start_time, end_time=log.end_time)
        for i, log in enumerate(task.time_logs)
    ]


class TaskRepository(BaseRepository[FocusTask]):
    """
    Repository for FocusTask

    Handles:
    - Upserts of single tasks and whole collections
    - Name and status lookups
    - Conversion between domain models and ORM models
    """

    async def get_by_id(self, id: UUID) -> Optional[FocusTask]:
        orm_task = self.session.query(FocusTaskModel).filter_by(id=str(id)).first()
        return task_from_orm(orm_task) if orm_task else None

    async def get_by_name(self, name: str) -> Optional[FocusTask]:
        """
        First non-archived task whose name matches case-insensitively
        """
        wanted = name.casefold()
        orm_tasks = (
            self.session.query(FocusTaskModel)
            .filter(FocusTaskModel.status != TaskStatus.ARCHIVED.value)
            .order_by(FocusTaskModel.created_at.asc())
            .all()
        )
        for orm_task in orm_tasks:
            if orm_task.name.casefold() == wanted:
                return task_from_orm(orm_task)
        return None

    async def get_all(self) -> List[FocusTask]:
        orm_tasks = (
            self.session.query(FocusTaskModel)
            .order_by(FocusTaskModel.created_at.asc())
            .all()
        )
        return [task_from_orm(t) for t in orm_tasks]

    async def get_by_status(self, status: TaskStatus) -> List[FocusTask]:
        orm_tasks = (
            self.session.query(FocusTaskModel)
            .filter(FocusTaskModel.status == status.value)
            .order_by(FocusTaskModel.created_at.asc())
            .all()
        )
        return [task_from_orm(t) for t in orm_tasks]

    async def save(self, task: FocusTask) -> FocusTask:
        self._upsert(task)
        self.commit()
        return task

    async def save_all(self, tasks: Iterable[FocusTask]) -> int:
        """
        Upsert every task in one transaction

        Tasks missing from the iterable are left untouched.

        Returns:
            Number of tasks written
        """
        count = 0
        for task in tasks:
            self._upsert(task)
            count += 1
        self.commit()
        return count

    async def delete(self, id: UUID) -> bool:
        """
        Delete task

        Returns:
            True if deleted, False if not found
        """
        orm_task = self.session.query(FocusTaskModel).filter_by(id=str(id)).first()
        if not orm_task:
            return False

        self.session.delete(orm_task)
        self.commit()
        return True

    def _upsert(self, task: FocusTask):
        orm_task = self.session.get(FocusTaskModel, str(task.id))
        if orm_task is None:
            orm_task = FocusTaskModel(id=str(task.id))
            self.session.add(orm_task)
        _apply_to_orm(orm_task, task)
