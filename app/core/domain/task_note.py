"""
TaskNote Entity

Timestamped context attached to a FocusTask. A note without a task id
is standalone.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from . import clock
from .exceptions import InvalidArgumentError


@dataclass(eq=False)
class TaskNote:
    content: str
    task_id: Optional[UUID] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=lambda: clock.utcnow())

    def __post_init__(self):
        if not self.content or not self.content.strip():
            raise InvalidArgumentError("Note content cannot be empty.")
        self.content = self.content.strip()

    @property
    def is_standalone(self) -> bool:
        return self.task_id is None

    def attach_to_task(self, task_id: UUID):
        self.task_id = task_id
