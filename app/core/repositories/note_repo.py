"""
Note Repository

Implementation of repository pattern for TaskNote entities
"""

from typing import List, Optional
from uuid import UUID

from .base import BaseRepository
from ..domain import clock
from ..domain.task_note import TaskNote
from ...models import TaskNote as TaskNoteModel


def note_from_orm(orm_note: TaskNoteModel) -> TaskNote:
    """Convert SQLAlchemy ORM model to domain model"""
    return TaskNote(
        id=UUID(orm_note.id),
        content=orm_note.content,
        task_id=UUID(orm_note.task_id) if orm_note.task_id else None,
        created_at=clock.ensure_utc(orm_note.created_at)
    )


class NoteRepository(BaseRepository[TaskNote]):
    """Repository for TaskNote"""

    async def get_by_id(self, id: UUID) -> Optional[TaskNote]:
        orm_note = self.session.query(TaskNoteModel).filter_by(id=str(id)).first()
        return note_from_orm(orm_note) if orm_note else None

    async def get_by_task_id(self, task_id: UUID) -> List[TaskNote]:
        orm_notes = (
            self.session.query(TaskNoteModel)
            .filter(TaskNoteModel.task_id == str(task_id))
            .order_by(TaskNoteModel.created_at.asc())
            .all()
        )
        return [note_from_orm(n) for n in orm_notes]

    async def get_standalone_notes(self) -> List[TaskNote]:
        orm_notes = (
            self.session.query(TaskNoteModel)
            .filter(TaskNoteModel.task_id.is_(None))
            .order_by(TaskNoteModel.created_at.asc())
            .all()
        )
        return [note_from_orm(n) for n in orm_notes]

    async def get_all(self) -> List[TaskNote]:
        orm_notes = self.session.query(TaskNoteModel).order_by(TaskNoteModel.created_at.asc()).all()
        return [note_from_orm(n) for n in orm_notes]

    async def save(self, note: TaskNote) -> TaskNote:
        orm_note = self.session.get(TaskNoteModel, str(note.id))
        if orm_note is None:
            orm_note = TaskNoteModel(id=str(note.id))
            self.session.add(orm_note)

        orm_note.content = note.content
        orm_note.task_id = str(note.task_id) if note.task_id else None
        orm_note.created_at = note.created_at

        self.commit()
        return note

    async def delete(self, id: UUID) -> bool:
        orm_note = self.session.query(TaskNoteModel).filter_by(id=str(id)).first()
        if not orm_note:
            return False

        self.session.delete(orm_note)
        self.commit()
        return True
