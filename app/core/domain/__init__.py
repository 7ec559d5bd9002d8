"""
Domain Models Package

This package contains domain models (value objects, entities and the task
aggregate) that represent the focus tracking core, independent of storage,
speech and scheduling infrastructure.

Following Domain-Driven Design (DDD) principles:
- Value Objects: Immutable, identified by their attributes
- Entities: Mutable, identified by ID
- Aggregates: Clusters of entities with a root enforcing invariants
"""

from .exceptions import (
    FocusAssistantError,
    InvalidArgumentError,
    InvalidStateError,
    InvalidOperationError,
    TaskNotFoundError
)

from .value_objects import (
    TaskStatus,
    TimeLogEntry,
    ReminderInterval
)

from .events import (
    DomainEvent,
    TaskCreatedEvent,
    TaskCompletedEvent,
    TaskSwitchedEvent
)

from .focus_task import FocusTask
from .work_session import WorkSession
from .task_note import TaskNote
from .preferences import UserPreferences
from .task_aggregate import TaskAggregate

__all__ = [
    # Errors
    "FocusAssistantError",
    "InvalidArgumentError",
    "InvalidStateError",
    "InvalidOperationError",
    "TaskNotFoundError",

    # Value objects
    "TaskStatus",
    "TimeLogEntry",
    "ReminderInterval",

    # Events
    "DomainEvent",
    "TaskCreatedEvent",
    "TaskCompletedEvent",
    "TaskSwitchedEvent",

    # Entities
    "FocusTask",
    "WorkSession",
    "TaskNote",
    "UserPreferences",

    # Aggregate
    "TaskAggregate"
]
