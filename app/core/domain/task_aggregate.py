"""
Task Aggregate

Consistency boundary over the task collection.

Key invariant: at most one task is IN_PROGRESS at any time.

Mutating operations record domain events into a drain-once buffer;
the tracking service clears it after a successful save.
"""

import logging
from typing import Callable, Iterable, List, Optional
from uuid import UUID

from .events import DomainEvent, TaskCompletedEvent, TaskCreatedEvent, TaskSwitchedEvent
from .exceptions import InvalidOperationError, TaskNotFoundError
from .focus_task import FocusTask
from .value_objects import TaskStatus

logger = logging.getLogger(__name__)


def _same_name(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


class TaskAggregate:
    """
    Aggregate root for the FocusTask lifecycle

    Name lookups are case-insensitive and first-match. Two predicates exist
    on purpose: find/has exclude only ARCHIVED tasks, while the switch target
    search also skips COMPLETED tasks.
    """

    def __init__(self):
        self._tasks: List[FocusTask] = []
        self._domain_events: List[DomainEvent] = []

    @property
    def tasks(self) -> List[FocusTask]:
        return list(self._tasks)

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._domain_events)

    @property
    def current_task(self) -> Optional[FocusTask]:
        return next((t for t in self._tasks if t.status == TaskStatus.IN_PROGRESS), None)

    def load_tasks(self, tasks: Iterable[FocusTask]):
        """Replace the whole collection (startup only)"""
        self._tasks = list(tasks)

    # ========== Commands ==========

    def create_task(self, name: str) -> FocusTask:
        """
        Create a new task and give it focus

        Any task currently in progress is paused first and a
        TaskSwitchedEvent is recorded for it. The new task gets its
        first time log entry here.
        """
        self._pause_current()

        task = FocusTask(name=name)
        task.start()
        self._tasks.append(task)
        self._domain_events.append(TaskCreatedEvent(task.id, task.name))
        logger.debug(f"Created task '{task.name}' ({task.id})")
        return task

    def switch_to_task(self, task_name: str) -> FocusTask:
        """
        Give focus to the named task, creating it when no open task matches
        """
        current = self.current_task
        target = self._find(
            task_name,
            lambda t: t.status not in [TaskStatus.COMPLETED, TaskStatus.ARCHIVED]
        )

        if current is not None and target is not None and current.id == target.id:
            return current

        self._pause_current()

        if target is not None:
            target.start()
            logger.debug(f"Switched to task '{target.name}'")
            return target

        return self.create_task(task_name)

    def complete_task(self, task_name: str) -> FocusTask:
        task = self.find_task_by_name(task_name)
        if task is None:
            raise TaskNotFoundError(task_name)

        task.complete()
        self._domain_events.append(TaskCompletedEvent(task.id, task.name))
        return task

    def complete_current_task(self) -> FocusTask:
        current = self.current_task
        if current is None:
            raise InvalidOperationError("No task is currently in progress.")

        current.complete()
        self._domain_events.append(TaskCompletedEvent(current.id, current.name))
        return current

    def rename_task(self, current_name: str, new_name: str) -> FocusTask:
        task = self.find_task_by_name(current_name)
        if task is None:
            raise TaskNotFoundError(current_name)

        task.rename(new_name)
        return task

    def delete_task(self, task_name: str) -> FocusTask:
        task = self.find_task_by_name(task_name)
        if task is None:
            raise TaskNotFoundError(task_name)

        self._tasks.remove(task)
        return task

    def merge_tasks(self, source_name: str, target_name: str) -> FocusTask:
        """
        Fold source into target and drop source from the collection
        """
        source = self.find_task_by_name(source_name)
        if source is None:
            raise TaskNotFoundError(source_name, role="source")
        target = self.find_task_by_name(target_name)
        if target is None:
            raise TaskNotFoundError(target_name, role="target")

        target.merge_from(source)
        self._tasks.remove(source)
        return target

    def clear_events(self, count: Optional[int] = None):
        """Drop all buffered events, or only the oldest count of them"""
        if count is None:
            self._domain_events.clear()
        else:
            del self._domain_events[:count]

    # ========== Queries ==========

    def get_open_tasks(self) -> List[FocusTask]:
        return [t for t in self._tasks if t.status.is_open()]

    def get_paused_tasks(self) -> List[FocusTask]:
        return [t for t in self._tasks if t.status == TaskStatus.PAUSED]

    def get_completed_tasks(self) -> List[FocusTask]:
        return [t for t in self._tasks if t.status == TaskStatus.COMPLETED]

    def find_task_by_name(self, name: str) -> Optional[FocusTask]:
        return self._find(name, lambda t: t.status != TaskStatus.ARCHIVED)

    def find_task_by_id(self, task_id: UUID) -> Optional[FocusTask]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def has_task_with_name(self, name: str) -> bool:
        return self.find_task_by_name(name) is not None

    def _find(self, name: str, predicate: Callable[[FocusTask], bool]) -> Optional[FocusTask]:
        return next(
            (t for t in self._tasks if _same_name(t.name, name) and predicate(t)),
            None
        )

    def _pause_current(self):
        current = self.current_task
        if current is None:
            return

        current.pause()
        self._domain_events.append(TaskSwitchedEvent(current.id, current.name))

    def __len__(self) -> int:
        return len(self._tasks)
