"""
Unit tests for PreferencesRepository
"""
import pytest
from datetime import time, timedelta

from app.core.domain.preferences import UserPreferences
from app.core.domain.value_objects import ReminderInterval


class TestPreferencesRepository:
    """Test single-row preferences storage"""

    @pytest.mark.asyncio
    async def test_empty(self, preferences_repo):
        assert await preferences_repo.get() is None
        assert await preferences_repo.exists() is False

    @pytest.mark.asyncio
    async def test_round_trip(self, preferences_repo, test_session):
        prefs = UserPreferences(
            default_reminder_interval=ReminderInterval.from_minutes(25),
            idle_check_in_threshold=timedelta(minutes=3),
            automatic_reflection_time=time(17, 45),
            wake_word="Hey Coach"
        )
        await preferences_repo.save(prefs)
        test_session.expire_all()

        loaded = await preferences_repo.get()

        assert loaded.id == prefs.id
        assert loaded.default_reminder_interval.duration == timedelta(minutes=25)
        assert loaded.idle_check_in_threshold == timedelta(minutes=3)
        assert loaded.automatic_reflection_time == time(17, 45)
        assert loaded.wake_word == "Hey Coach"
        assert await preferences_repo.exists() is True

    @pytest.mark.asyncio
    async def test_update_in_place(self, preferences_repo):
        prefs = UserPreferences()
        await preferences_repo.save(prefs)

        prefs.set_wake_word("Hey Jarvis")
        await preferences_repo.save(prefs)

        assert len(await preferences_repo.get_all()) == 1
        assert (await preferences_repo.get()).wake_word == "Hey Jarvis"

    @pytest.mark.asyncio
    async def test_new_record_replaces_old(self, preferences_repo):
        await preferences_repo.save(UserPreferences(wake_word="First"))
        second = UserPreferences(wake_word="Second")

        await preferences_repo.save(second)

        stored = await preferences_repo.get_all()
        assert [p.id for p in stored] == [second.id]
