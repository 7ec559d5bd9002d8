"""
Workers Module

Background loops driven by a timer rather than by user commands

Workers:
- ReminderWorker: Idle check-ins and paused-task reminders
"""

from .reminder_worker import ReminderWorker

__all__ = [
    "ReminderWorker",
]
