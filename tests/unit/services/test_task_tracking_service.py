"""
Unit tests for TaskTrackingService

Tests orchestration logic with mocked repositories
"""
import pytest
import pytest_asyncio
from unittest.mock import Mock, AsyncMock
from uuid import uuid4

from app.core.domain.events import TaskCreatedEvent, TaskSwitchedEvent
from app.core.domain.exceptions import InvalidOperationError, TaskNotFoundError
from app.core.domain.focus_task import FocusTask
from app.core.domain.value_objects import ReminderInterval, TaskStatus
from app.core.domain.work_session import WorkSession
from app.core.repositories.session_repo import SessionRepository
from app.core.repositories.task_repo import TaskRepository
from app.core.services.task_tracking_service import TaskTrackingService


@pytest.fixture
def mock_task_repo():
    """Create mock TaskRepository"""
    repo = Mock(spec=TaskRepository)
    repo.get_all = AsyncMock(return_value=[])
    repo.save_all = AsyncMock(return_value=0)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_session_repo():
    """Create mock SessionRepository"""
    repo = Mock(spec=SessionRepository)
    repo.get_latest = AsyncMock(return_value=None)
    repo.save = AsyncMock(side_effect=lambda s: s)
    return repo


@pytest.fixture
def tracking(mock_task_repo, mock_session_repo):
    """Create TaskTrackingService with mocked dependencies"""
    return TaskTrackingService(
        task_repo=mock_task_repo,
        session_repo=mock_session_repo
    )


@pytest_asyncio.fixture
async def initialized(tracking):
    await tracking.initialize()
    return tracking


class TestInitialize:
    """Test startup loading"""

    @pytest.mark.asyncio
    async def test_loads_tasks_and_creates_session(self, tracking, mock_task_repo, mock_session_repo):
        """Test that tasks are loaded and a new session is persisted"""
        paused = FocusTask(name="Paused work", status=TaskStatus.PAUSED)
        mock_task_repo.get_all.return_value = [paused]

        await tracking.initialize()

        assert tracking.get_paused_tasks() == [paused]
        assert tracking.current_session is not None
        assert tracking.current_session.is_active
        mock_session_repo.save.assert_called_once_with(tracking.current_session)

    @pytest.mark.asyncio
    async def test_resumes_active_session(self, tracking, mock_session_repo):
        """Test that an active latest session is reused"""
        existing = WorkSession()
        mock_session_repo.get_latest.return_value = existing

        await tracking.initialize()

        assert tracking.current_session is existing
        mock_session_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_ended_session_replaced(self, tracking, mock_session_repo):
        """Test that an ended latest session starts a fresh one"""
        ended = WorkSession()
        ended.end()
        mock_session_repo.get_latest.return_value = ended

        await tracking.initialize()

        assert tracking.current_session is not ended
        assert tracking.current_session.is_active
        mock_session_repo.save.assert_called_once()

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, tracking, mock_task_repo):
        """Test that load failures are not swallowed"""
        mock_task_repo.get_all.side_effect = RuntimeError("disk gone")

        with pytest.raises(RuntimeError, match="disk gone"):
            await tracking.initialize()


class TestCommands:
    """Test mutating wrappers"""

    @pytest.mark.asyncio
    async def test_create_records_task_in_session(self, initialized):
        task = initialized.create_task("Write report")

        assert initialized.get_current_task() is task
        assert initialized.current_session.task_ids_worked_on == [task.id]

    @pytest.mark.asyncio
    async def test_switch_records_task_in_session(self, initialized):
        first = initialized.create_task("A")
        second = initialized.switch_task("B")
        initialized.switch_task("A")

        assert initialized.current_session.task_ids_worked_on == [first.id, second.id]
        assert initialized.get_current_task() is first

    @pytest.mark.asyncio
    async def test_switch_pauses_previous(self, initialized):
        first = initialized.create_task("Task A")
        initialized.switch_task("Task B")

        assert first.status == TaskStatus.PAUSED
        assert initialized.get_paused_tasks() == [first]

    @pytest.mark.asyncio
    async def test_complete_current_without_name(self, initialized):
        task = initialized.create_task("A")

        result = initialized.complete_task()

        assert result is task
        assert task.status == TaskStatus.COMPLETED
        assert initialized.get_completed_tasks() == [task]

    @pytest.mark.asyncio
    async def test_complete_without_current_fails(self, initialized):
        with pytest.raises(InvalidOperationError):
            initialized.complete_task()

    @pytest.mark.asyncio
    async def test_complete_by_name(self, initialized):
        task = initialized.create_task("A")
        initialized.create_task("B")

        assert initialized.complete_task("a") is task

    @pytest.mark.asyncio
    async def test_rename(self, initialized):
        initialized.create_task("Old")
        initialized.rename_task("Old", "New")
        assert initialized.has_task_with_name("New")
        assert initialized.find_task_by_name("Old") is None

    @pytest.mark.asyncio
    async def test_delete_unknown_fails(self, initialized):
        with pytest.raises(TaskNotFoundError):
            initialized.delete_task("ghost")

    @pytest.mark.asyncio
    async def test_merge(self, initialized):
        initialized.create_task("Source")
        target = initialized.create_task("Target")

        result = initialized.merge_tasks("Source", "Target")

        assert result is target
        assert not initialized.has_task_with_name("Source")
        assert len(initialized.get_all_tasks()) == 1

    @pytest.mark.asyncio
    async def test_merge_unknown_source_fails(self, initialized):
        initialized.create_task("Target")
        with pytest.raises(TaskNotFoundError, match="Source task"):
            initialized.merge_tasks("Ghost", "Target")


class TestSave:
    """Test persistence and event draining"""

    @pytest.mark.asyncio
    async def test_save_persists_tasks_and_session(self, initialized, mock_task_repo, mock_session_repo):
        task = initialized.create_task("A")
        mock_session_repo.save.reset_mock()

        await initialized.save()

        mock_task_repo.save_all.assert_called_once_with([task])
        mock_session_repo.save.assert_called_once_with(initialized.current_session)
        assert initialized.pending_events == []

    @pytest.mark.asyncio
    async def test_events_pending_until_save(self, initialized):
        initialized.create_task("A")

        events = initialized.pending_events

        assert len(events) == 1
        assert isinstance(events[0], TaskCreatedEvent)

    @pytest.mark.asyncio
    async def test_failed_save_keeps_events(self, initialized, mock_task_repo):
        initialized.create_task("A")
        mock_task_repo.save_all.side_effect = RuntimeError("locked")

        with pytest.raises(RuntimeError):
            await initialized.save()

        assert len(initialized.pending_events) == 1

    @pytest.mark.asyncio
    async def test_save_deletes_removed_tasks(self, initialized, mock_task_repo):
        deleted = initialized.create_task("Gone")
        source = initialized.create_task("Source")
        initialized.create_task("Target")
        initialized.delete_task("Gone")
        initialized.merge_tasks("Source", "Target")

        await initialized.save()

        deleted_ids = {call.args[0] for call in mock_task_repo.delete.call_args_list}
        assert deleted_ids == {deleted.id, source.id}

    @pytest.mark.asyncio
    async def test_removed_ids_forgotten_after_save(self, initialized, mock_task_repo):
        initialized.create_task("Gone")
        initialized.delete_task("Gone")
        await initialized.save()
        mock_task_repo.delete.reset_mock()

        await initialized.save()

        mock_task_repo.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_events_raised_during_save_are_kept(self, initialized, mock_task_repo):
        initialized.create_task("A")

        def create_while_saving(tasks):
            initialized.create_task("Late")
            return len(tasks)

        mock_task_repo.save_all.side_effect = create_while_saving

        await initialized.save()

        events = initialized.pending_events
        assert [type(e) for e in events] == [TaskSwitchedEvent, TaskCreatedEvent]
        assert events[1].task_name == "Late"


class TestEntityUpdates:
    """Test locked updates of individual tasks"""

    @pytest.mark.asyncio
    async def test_attach_note(self, initialized):
        task = initialized.create_task("A")
        note_id = uuid4()

        initialized.attach_note(task, note_id)

        assert task.note_ids == [note_id]

    @pytest.mark.asyncio
    async def test_archive_tasks(self, initialized):
        task = initialized.create_task("A")
        initialized.complete_task()

        initialized.archive_tasks([task])

        assert task.status == TaskStatus.ARCHIVED
        assert not initialized.has_task_with_name("A")

    @pytest.mark.asyncio
    async def test_set_reminder_interval(self, initialized):
        task = initialized.create_task("A")
        interval = ReminderInterval.from_minutes(10, is_per_task_override=True)

        assert initialized.set_reminder_interval("a", interval) is task
        assert task.reminder_interval == interval

    @pytest.mark.asyncio
    async def test_set_reminder_interval_unknown(self, initialized):
        with pytest.raises(TaskNotFoundError):
            initialized.set_reminder_interval("Ghost", ReminderInterval.default())

    @pytest.mark.asyncio
    async def test_set_priorities_all_or_nothing(self, initialized):
        a = initialized.create_task("A")
        b = initialized.create_task("B")

        with pytest.raises(TaskNotFoundError):
            initialized.set_priorities(["B", "Ghost"])
        assert b.priority_ranking is None

        assert initialized.set_priorities(["B", "A"]) == [b, a]
        assert (b.priority_ranking, a.priority_ranking) == (1, 2)


class TestEndSession:
    """Test ending the work session"""

    @pytest.mark.asyncio
    async def test_end_session(self, initialized, mock_session_repo):
        mock_session_repo.save.reset_mock()

        session = await initialized.end_session("Productive")

        assert not session.is_active
        assert session.reflection_summary == "Productive"
        mock_session_repo.save.assert_called_once_with(session)

    @pytest.mark.asyncio
    async def test_end_session_twice_fails(self, initialized):
        await initialized.end_session()
        with pytest.raises(InvalidOperationError):
            await initialized.end_session()
