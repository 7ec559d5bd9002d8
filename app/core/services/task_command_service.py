"""
Task Command Service - Task lifecycle, notes, reminders, priorities and archiving
Implements: Single Responsibility Principle (SRP)

Each command validates its input, runs against the tracking service and
persists, then returns a CommandResult instead of raising for expected
user mistakes ("no such task", "nothing to archive"). A voice driver can
speak error_message directly.
"""
import logging
from dataclasses import dataclass, field
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..domain import clock
from ..domain.exceptions import FocusAssistantError, TaskNotFoundError
from ..domain.focus_task import FocusTask
from ..domain.preferences import UserPreferences
from ..domain.task_note import TaskNote
from ..domain.value_objects import ReminderInterval
from ..repositories.note_repo import NoteRepository
from ..repositories.preferences_repo import PreferencesRepository
from .task_tracking_service import TaskTrackingService

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """
    Outcome of a user command

    Attributes:
        is_success: Whether the command was applied
        message: Human readable confirmation (if success)
        error_message: Why it failed (if not success)
        requires_confirmation: Command needs an explicit "yes" first
        requires_task_selection: Command needs the user to pick a task
        data: Extra command-specific payload
    """
    is_success: bool
    message: Optional[str] = None
    error_message: Optional[str] = None
    requires_confirmation: bool = False
    requires_task_selection: bool = False
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, message: str, **data) -> 'CommandResult':
        return cls(is_success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str) -> 'CommandResult':
        return cls(is_success=False, error_message=message)


class TaskCommandService:
    """Service handling task commands on top of TaskTrackingService"""

    def __init__(
        self,
        tracking: TaskTrackingService,
        note_repo: NoteRepository,
        preferences_repo: PreferencesRepository
    ):
        self.tracking = tracking
        self.note_repo = note_repo
        self.preferences_repo = preferences_repo

    async def create_task(self, name: str, force: bool = False) -> CommandResult:
        """
        Create a task and give it focus

        Business rules:
        - Name cannot be blank
        - A task with the same name (any case) must be confirmed with force
        - The task that was in progress is paused and reported back
        """
        if not name or not name.strip():
            return CommandResult.error("Task name cannot be empty.")

        if not force:
            existing = self.tracking.find_task_by_name(name)
            if existing is not None:
                logger.info(f"Task name '{name}' already used, asking for confirmation")
                return CommandResult(
                    is_success=False,
                    error_message=f"A task named '{existing.name}' already exists ({existing.status.value}).",
                    requires_confirmation=True,
                    data={"task_name": existing.name, "existing_status": existing.status.value}
                )

        previous = self.tracking.get_current_task()
        try:
            task = self.tracking.create_task(name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()

        paused_task_name = previous.name if previous is not None else None
        return CommandResult.success(
            f"Started '{task.name}'.", task_name=task.name, paused_task_name=paused_task_name
        )

    async def switch_task(self, name: str) -> CommandResult:
        """
        Switch focus to the named task, creating it when nothing open matches

        When the task already has notes, the most recent one is returned so
        it can be read back on resume.
        """
        if not name or not name.strip():
            return CommandResult.error("Task name cannot be empty.")

        known_ids = {t.id for t in self.tracking.get_all_tasks()}
        previous = self.tracking.get_current_task()
        try:
            task = self.tracking.switch_task(name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()

        last_note = None
        if task.note_ids:
            notes = await self.note_repo.get_by_task_id(task.id)
            if notes:
                last_note = notes[-1].content

        return CommandResult.success(
            f"Switched to '{task.name}'.",
            task_name=task.name,
            previous_task_name=previous.name if previous is not None else None,
            was_created=task.id not in known_ids,
            last_note=last_note
        )

    async def complete_task(self, name: Optional[str] = None) -> CommandResult:
        """
        Complete the named task, or the current one for a missing or blank
        name; paused tasks are suggested as what to do next
        """
        if name is not None and not name.strip():
            name = None

        try:
            task = self.tracking.complete_task(name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()

        paused = [t.name for t in self.tracking.get_paused_tasks()]
        return CommandResult.success(
            f"Completed '{task.name}'.", task_name=task.name, paused_task_suggestions=paused
        )

    async def rename_task(self, old_name: str, new_name: str) -> CommandResult:
        """Rename a task; the new name must not belong to another task"""
        if not old_name or not old_name.strip() or not new_name or not new_name.strip():
            return CommandResult.error("Both old and new task names are required.")

        if self.tracking.has_task_with_name(new_name):
            return CommandResult.error(f"A task named '{new_name}' already exists.")

        try:
            task = self.tracking.rename_task(old_name, new_name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()
        return CommandResult.success(
            f"Renamed '{old_name}' to '{task.name}'.", old_name=old_name, new_name=task.name
        )

    async def merge_tasks(self, source_name: str, target_name: str) -> CommandResult:
        """Fold source into target; source is deleted"""
        if not source_name or not source_name.strip() or not target_name or not target_name.strip():
            return CommandResult.error("Both source and target task names are required.")

        if source_name.strip().casefold() == target_name.strip().casefold():
            return CommandResult.error("Cannot merge a task with itself.")

        try:
            target = self.tracking.merge_tasks(source_name, target_name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()
        return CommandResult.success(
            f"Merged '{source_name}' into '{target.name}'.",
            source_name=source_name,
            target_name=target.name
        )

    async def add_note(
        self,
        content: str,
        task_name: Optional[str] = None,
        store_as_standalone: bool = False
    ) -> CommandResult:
        """
        Attach a note to the named or current task

        Business rules:
        - Content cannot be blank
        - Named task must exist
        - With no task at all, the note is only stored when
          store_as_standalone is set; otherwise ask which task
        """
        if not content or not content.strip():
            return CommandResult.error("Note content cannot be empty.")

        if task_name is not None:
            task = self.tracking.find_task_by_name(task_name)
            if task is None:
                return CommandResult.error(f"Task '{task_name}' not found.")
        else:
            task = self.tracking.get_current_task()

        if task is None and not store_as_standalone:
            return CommandResult(
                is_success=False,
                requires_task_selection=True,
                data={"content": content.strip()}
            )

        note = TaskNote(content=content, task_id=task.id if task else None)
        await self.note_repo.save(note)

        if task is not None:
            self.tracking.attach_note(task, note.id)
            await self.tracking.save()
            return CommandResult.success(
                f"Added note to '{task.name}'.", note_id=note.id, task_name=task.name
            )

        return CommandResult.success("Saved standalone note.", note_id=note.id, task_name=None)

    async def get_task_notes(self, task_name: Optional[str] = None) -> CommandResult:
        """
        Notes for the named task, or the current task when no name is given

        With no name and nothing in progress, the standalone notes are returned.
        """
        if task_name is not None:
            task = self.tracking.find_task_by_name(task_name)
            if task is None:
                return CommandResult.error(f"Task '{task_name}' not found.")
        else:
            task = self.tracking.get_current_task()
            if task is None:
                standalone = await self.note_repo.get_standalone_notes()
                return CommandResult.success(
                    f"You have {len(standalone)} standalone note(s).",
                    task_name=None,
                    notes=[n.content for n in standalone]
                )

        notes = await self.note_repo.get_by_task_id(task.id)
        return CommandResult.success(
            f"'{task.name}' has {len(notes)} note(s).",
            task_name=task.name,
            notes=[n.content for n in notes]
        )

    async def archive_tasks(self, older_than_days: Optional[int] = None) -> CommandResult:
        """
        Archive completed tasks

        With older_than_days, only tasks completed before the cutoff are
        archived. Completion time is the end of the last time log, or the
        creation time for tasks that never logged time.
        """
        completed = self.tracking.get_completed_tasks()
        if not completed:
            return CommandResult.error("No completed tasks to archive.")

        to_archive = completed
        if older_than_days is not None:
            if older_than_days < 0:
                return CommandResult.error("Days must be a non-negative number.")

            cutoff = clock.utcnow() - timedelta(days=older_than_days)
            to_archive = [t for t in completed if self._completed_at(t) < cutoff]
            if not to_archive:
                return CommandResult.error(
                    f"No completed tasks older than {older_than_days} days."
                )

        try:
            self.tracking.archive_tasks(to_archive)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()

        names = [t.name for t in to_archive]
        return CommandResult.success(f"Archived {len(names)} task(s).", archived_task_names=names)

    async def set_reminder(self, minutes: float, task_name: Optional[str] = None) -> CommandResult:
        """
        Set a per-task reminder override, or the global default when no
        task name is given
        """
        if minutes <= 0:
            return CommandResult.error("Reminder interval must be a positive number of minutes.")

        interval = ReminderInterval.from_minutes(minutes, is_per_task_override=task_name is not None)

        if task_name is not None:
            try:
                task = self.tracking.set_reminder_interval(task_name, interval)
            except TaskNotFoundError:
                return CommandResult.error(f"No task named '{task_name}' found.")

            await self.tracking.save()
            return CommandResult.success(
                f"Set reminder for '{task.name}' to {interval}.", task_name=task.name
            )

        prefs = await self.preferences_repo.get()
        if prefs is None:
            prefs = UserPreferences(default_reminder_interval=interval)
        else:
            prefs.set_default_reminder_interval(interval)
        await self.preferences_repo.save(prefs)

        return CommandResult.success(f"Set default reminder interval to {interval}.", task_name=None)

    async def set_priorities(self, ordered_task_names: List[str]) -> CommandResult:
        """
        Rank tasks 1..n in the given order

        Business rules:
        - At least one name, none blank, no duplicates (case-insensitive)
        - Every name must resolve to a task
        """
        if not ordered_task_names:
            return CommandResult.error("No tasks specified for prioritization.")

        if any(not n or not n.strip() for n in ordered_task_names):
            return CommandResult.error("Task names cannot be empty.")

        distinct = {n.strip().casefold() for n in ordered_task_names}
        if len(distinct) != len(ordered_task_names):
            return CommandResult.error("Duplicate task names are not allowed in priority list.")

        try:
            tasks = self.tracking.set_priorities([n.strip() for n in ordered_task_names])
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()
        return CommandResult.success(
            f"Prioritized {len(tasks)} task(s).",
            ordered_task_names=[t.name for t in tasks]
        )

    async def delete_task(self, name: str, confirmed: bool = False) -> CommandResult:
        """Delete a task; the first call only asks for confirmation"""
        if not name or not name.strip():
            return CommandResult.error("Task name is required.")

        if not self.tracking.has_task_with_name(name):
            return CommandResult.error(f"No task named '{name}' found.")

        if not confirmed:
            return CommandResult(
                is_success=False,
                requires_confirmation=True,
                data={"task_name": name}
            )

        try:
            task = self.tracking.delete_task(name)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.tracking.save()
        return CommandResult.success(f"Deleted '{task.name}'.", task_name=task.name)

    def get_open_tasks(self) -> List[FocusTask]:
        """Open tasks, ranked ones first by rank, then by creation time"""
        return sorted(
            self.tracking.get_open_tasks(),
            key=lambda t: (t.priority_ranking is None, t.priority_ranking or 0, t.created_at)
        )

    async def save_preferences(
        self,
        default_reminder_minutes: Optional[float] = None,
        idle_check_in_minutes: Optional[float] = None,
        automatic_reflection_time: Optional[time] = None,
        wake_word: Optional[str] = None
    ) -> CommandResult:
        """Create or update preferences; only the given fields change"""
        try:
            prefs = await self.preferences_repo.get() or UserPreferences()

            if default_reminder_minutes is not None:
                prefs.set_default_reminder_interval(ReminderInterval.from_minutes(default_reminder_minutes))
            if idle_check_in_minutes is not None:
                prefs.set_idle_check_in_threshold(timedelta(minutes=idle_check_in_minutes))
            if automatic_reflection_time is not None:
                prefs.set_automatic_reflection_time(automatic_reflection_time)
            if wake_word is not None:
                prefs.set_wake_word(wake_word)
        except FocusAssistantError as e:
            return CommandResult.error(str(e))

        await self.preferences_repo.save(prefs)
        return CommandResult.success("Preferences saved.", preferences=prefs)

    @staticmethod
    def _completed_at(task: FocusTask):
        if task.time_logs and task.time_logs[-1].end_time is not None:
            return task.time_logs[-1].end_time
        return task.created_at
