"""
Domain Exceptions

Error taxonomy for the focus assistant core:
- InvalidArgumentError: blank names/content, non-positive durations or ranks,
  end-before-start timestamps
- InvalidStateError: illegal entity transition
- InvalidOperationError: operation not valid right now (no task in progress,
  merging a task with itself, ending an ended session)
- TaskNotFoundError: name lookup miss inside the aggregate

All are raised synchronously and never retried inside the core.
"""


class FocusAssistantError(Exception):
    """Base class for all domain errors"""
    pass


class InvalidArgumentError(FocusAssistantError, ValueError):
    """Raised when an argument fails domain validation"""
    pass


class InvalidStateError(FocusAssistantError):
    """Raised when an entity cannot make the requested transition"""
    pass


class InvalidOperationError(InvalidStateError):
    """Raised when an operation is not valid in the current state"""
    pass


class TaskNotFoundError(InvalidOperationError, LookupError):
    """Raised when a task name lookup finds nothing"""

    def __init__(self, task_name: str, role: str = ""):
        self.task_name = task_name
        prefix = f"{role.capitalize()} task" if role else "Task"
        super().__init__(f"{prefix} '{task_name}' not found.")
