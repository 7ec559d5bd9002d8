"""
Repository Pattern Implementation

Implements Dependency Inversion Principle (DIP):
- High-level code (services, scheduler) depends on repository abstractions
- Low-level code (SQLAlchemy) implements these abstractions

Benefits:
- Easy to test (can mock repositories)
- Easy to swap storage (just implement new repository)
- Domain layer independent of infrastructure
"""

from .base import BaseRepository
from .task_repo import TaskRepository
from .session_repo import SessionRepository
from .preferences_repo import PreferencesRepository
from .note_repo import NoteRepository

__all__ = [
    "BaseRepository",
    "TaskRepository",
    "SessionRepository",
    "PreferencesRepository",
    "NoteRepository"
]
