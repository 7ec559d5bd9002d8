"""
Domain Events

Recorded by the TaskAggregate while it mutates tasks and drained by
the tracking service once state has been persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from . import clock


@dataclass(frozen=True)
class DomainEvent:
    """Base class; occurred_at is stamped at construction"""

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class TaskCreatedEvent(DomainEvent):
    task_id: UUID
    task_name: str
    occurred_at: datetime = field(default_factory=lambda: clock.utcnow())


@dataclass(frozen=True)
class TaskCompletedEvent(DomainEvent):
    task_id: UUID
    task_name: str
    occurred_at: datetime = field(default_factory=lambda: clock.utcnow())


@dataclass(frozen=True)
class TaskSwitchedEvent(DomainEvent):
    """Emitted whenever a task loses focus, not only on explicit switches"""
    previous_task_id: UUID
    previous_task_name: str
    occurred_at: datetime = field(default_factory=lambda: clock.utcnow())
