"""
Preferences Repository

Single-row storage for UserPreferences
"""

from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from .base import BaseRepository
from ..domain import clock
from ..domain.preferences import UserPreferences
from ..domain.value_objects import ReminderInterval
from ...models import UserPreferences as UserPreferencesModel


def preferences_from_orm(orm_prefs: UserPreferencesModel) -> UserPreferences:
    """Convert SQLAlchemy ORM model to domain model"""
    return UserPreferences(
        id=UUID(orm_prefs.id),
        default_reminder_interval=ReminderInterval(
            timedelta(seconds=orm_prefs.default_reminder_seconds)
        ),
        idle_check_in_threshold=timedelta(seconds=orm_prefs.idle_check_in_seconds),
        automatic_reflection_time=orm_prefs.automatic_reflection_time,
        wake_word=orm_prefs.wake_word,
        created_at=clock.ensure_utc(orm_prefs.created_at),
        updated_at=clock.ensure_utc(orm_prefs.updated_at)
    )


class PreferencesRepository(BaseRepository[UserPreferences]):
    """
    Repository for UserPreferences

    The user has one preferences record; get() returns the first row.
    """

    async def get(self) -> Optional[UserPreferences]:
        orm_prefs = self.session.query(UserPreferencesModel).first()
        return preferences_from_orm(orm_prefs) if orm_prefs else None

    async def get_by_id(self, id: UUID) -> Optional[UserPreferences]:
        orm_prefs = self.session.query(UserPreferencesModel).filter_by(id=str(id)).first()
        return preferences_from_orm(orm_prefs) if orm_prefs else None

    async def get_all(self) -> List[UserPreferences]:
        return [preferences_from_orm(p) for p in self.session.query(UserPreferencesModel).all()]

    async def exists(self) -> bool:
        return self.session.query(UserPreferencesModel).first() is not None

    async def save(self, preferences: UserPreferences) -> UserPreferences:
        orm_prefs = self.session.get(UserPreferencesModel, str(preferences.id))
        if orm_prefs is None:
            # Keep a single row: replace whatever was stored before
            self.session.query(UserPreferencesModel).delete()
            orm_prefs = UserPreferencesModel(id=str(preferences.id))
            self.session.add(orm_prefs)

        orm_prefs.default_reminder_seconds = preferences.default_reminder_interval.duration.total_seconds()
        orm_prefs.idle_check_in_seconds = preferences.idle_check_in_threshold.total_seconds()
        orm_prefs.automatic_reflection_time = preferences.automatic_reflection_time
        orm_prefs.wake_word = preferences.wake_word
        orm_prefs.created_at = preferences.created_at
        orm_prefs.updated_at = preferences.updated_at

        self.commit()
        return preferences
