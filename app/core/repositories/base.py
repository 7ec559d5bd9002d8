"""
Base Repository

Abstract base class for all repositories

Implements:
- DIP: Abstract interface that services depend on
- ISP: Minimal interface, specific repos extend it
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, List
from uuid import UUID
from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository

    Generic[T]: T is the domain model type (FocusTask, WorkSession, etc.)

    Subclasses must implement:
    - get_by_id
    - get_all
    - save (insert or update, then commit)
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session

        Args:
            session: SQLAlchemy session
        """
        self.session = session

    @abstractmethod
    async def get_by_id(self, id: UUID) -> Optional[T]:
        """
        Get entity by ID

        Returns:
            Domain model or None if not found
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[T]:
        """
        Get all entities

        Returns:
            List of domain models
        """
        pass

    @abstractmethod
    async def save(self, entity: T) -> T:
        """
        Insert or update entity

        Returns:
            The saved domain model
        """
        pass

    def commit(self):
        """
        Commit transaction, rolling back if the commit fails

        The original error propagates to the caller.
        """
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
