"""
Session Repository

Implementation of repository pattern for WorkSession entities
"""

from typing import List, Optional
from uuid import UUID

from .base import BaseRepository
from ..domain import clock
from ..domain.work_session import WorkSession
from ...models import WorkSession as WorkSessionModel


def session_from_orm(orm_session: WorkSessionModel) -> WorkSession:
    """Convert SQLAlchemy ORM model to domain model"""
    return WorkSession(
        id=UUID(orm_session.id),
        start_time=clock.ensure_utc(orm_session.start_time),
        end_time=clock.ensure_utc(orm_session.end_time) if orm_session.end_time else None,
        task_ids_worked_on=[UUID(t) for t in (orm_session.task_ids or [])],
        reflection_summary=orm_session.reflection_summary
    )


class SessionRepository(BaseRepository[WorkSession]):
    """Repository for WorkSession"""

    async def get_by_id(self, id: UUID) -> Optional[WorkSession]:
        orm_session = self.session.query(WorkSessionModel).filter_by(id=str(id)).first()
        return session_from_orm(orm_session) if orm_session else None

    async def get_latest(self) -> Optional[WorkSession]:
        """
        Most recently started session

        Returns:
            WorkSession or None when nothing was saved yet
        """
        orm_session = (
            self.session.query(WorkSessionModel)
            .order_by(WorkSessionModel.start_time.desc())
            .first()
        )
        return session_from_orm(orm_session) if orm_session else None

    async def get_all(self) -> List[WorkSession]:
        orm_sessions = (
            self.session.query(WorkSessionModel)
            .order_by(WorkSessionModel.start_time.asc())
            .all()
        )
        return [session_from_orm(s) for s in orm_sessions]

    async def save(self, work_session: WorkSession) -> WorkSession:
        orm_session = self.session.get(WorkSessionModel, str(work_session.id))
        if orm_session is None:
            orm_session = WorkSessionModel(id=str(work_session.id))
            self.session.add(orm_session)

        orm_session.start_time = work_session.start_time
        orm_session.end_time = work_session.end_time
        orm_session.task_ids = [str(t) for t in work_session.task_ids_worked_on]
        orm_session.reflection_summary = work_session.reflection_summary

        self.commit()
        return work_session
