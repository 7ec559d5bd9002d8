"""
WorkSession Entity

A continuous period of interaction, typically one workday. Created on
startup (or resumed if the latest one is still active) and ended once.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from . import clock
from .exceptions import InvalidArgumentError, InvalidOperationError


@dataclass(eq=False)
class WorkSession:
    id: UUID = field(default_factory=uuid4)
    start_time: datetime = field(default_factory=lambda: clock.utcnow())
    end_time: Optional[datetime] = None
    task_ids_worked_on: List[UUID] = field(default_factory=list)
    reflection_summary: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def record_task_worked_on(self, task_id: UUID):
        if task_id not in self.task_ids_worked_on:
            self.task_ids_worked_on.append(task_id)

    def end(self, reflection_summary: Optional[str] = None):
        if self.end_time is not None:
            raise InvalidOperationError("Session is already ended.")

        self.end_time = clock.utcnow()
        self.reflection_summary = reflection_summary

    def set_reflection_summary(self, summary: str):
        if not summary or not summary.strip():
            raise InvalidArgumentError("Reflection summary cannot be empty.")

        self.reflection_summary = summary.strip()

    def __str__(self) -> str:
        state = "active" if self.is_active else "ended"
        return f"WorkSession(id={self.id}, {state}, tasks={len(self.task_ids_worked_on)})"
