"""
Unit tests for SessionRepository
"""
import pytest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from app.core.domain.work_session import WorkSession


T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class TestSessionRepository:
    """Test work session persistence"""

    @pytest.mark.asyncio
    async def test_get_latest_empty(self, session_repo):
        assert await session_repo.get_latest() is None

    @pytest.mark.asyncio
    async def test_round_trip(self, session_repo, test_session):
        task_id = uuid4()
        work_session = WorkSession(start_time=T0)
        work_session.record_task_worked_on(task_id)
        await session_repo.save(work_session)
        test_session.expire_all()

        loaded = await session_repo.get_by_id(work_session.id)

        assert loaded.start_time == T0
        assert loaded.is_active
        assert loaded.task_ids_worked_on == [task_id]

    @pytest.mark.asyncio
    async def test_get_latest_by_start_time(self, session_repo):
        older = WorkSession(start_time=T0)
        newer = WorkSession(start_time=T0 + timedelta(days=1))
        await session_repo.save(newer)
        await session_repo.save(older)

        latest = await session_repo.get_latest()

        assert latest.id == newer.id

    @pytest.mark.asyncio
    async def test_update_ended_session(self, session_repo, test_session):
        work_session = WorkSession(start_time=T0)
        await session_repo.save(work_session)

        work_session.end("Wrapped up")
        await session_repo.save(work_session)
        test_session.expire_all()

        loaded = await session_repo.get_latest()
        assert not loaded.is_active
        assert loaded.reflection_summary == "Wrapped up"
        assert len(await session_repo.get_all()) == 1
