"""
Services Package

Business logic layer orchestrating the task aggregate, repositories and
reminder timing.
"""

from .task_tracking_service import TaskTrackingService
from .reminder_scheduler import ReminderScheduler, PausedTaskReminder
from .task_command_service import TaskCommandService, CommandResult

__all__ = [
    'TaskTrackingService',
    'ReminderScheduler',
    'PausedTaskReminder',
    'TaskCommandService',
    'CommandResult',
]
