"""
Reminder Worker - Periodic idle check-ins and paused-task reminders
Implements: Single Responsibility Principle (SRP)
"""
import asyncio
import logging
from typing import Optional

from ..drivers.abstractions import VoiceOutput
from ..services.reminder_scheduler import ReminderScheduler

logger = logging.getLogger(__name__)

IDLE_CHECK_IN_PROMPT = (
    "You've been quiet for a while and nothing is in progress. "
    "What are you working on?"
)


class ReminderWorker:
    """
    Timer-driven reader of ReminderScheduler state

    Each tick speaks at most one idle check-in and one reminder summary.
    A failing tick is logged and the loop keeps going.
    """

    def __init__(
        self,
        scheduler: ReminderScheduler,
        voice_output: VoiceOutput,
        check_interval: float = 30.0,
        startup_delay: float = 5.0,
        stop_event: Optional[asyncio.Event] = None
    ):
        self.scheduler = scheduler
        self.voice_output = voice_output
        self.check_interval = check_interval
        self.startup_delay = startup_delay
        self.stop_event = stop_event or asyncio.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self):
        """Start worker loop"""
        if self._running:
            logger.warning(f"{self.__class__.__name__} already running")
            return

        # A stop requested before the first tick still wins
        self._running = True

        logger.info(f"[START] {self.__class__.__name__} started (interval={self.check_interval}s)")

        try:
            # Give the voice loop time to come up
            if await self._wait(self.startup_delay):
                return
            await self._worker_loop()
        except Exception as e:
            logger.error(f"[ERROR] {self.__class__.__name__} crashed: {e}", exc_info=True)
        finally:
            self._running = False

    async def stop(self):
        """Signal the loop to exit"""
        logger.info(f"[STOP] {self.__class__.__name__} stopping...")
        self.stop_event.set()

    async def _worker_loop(self):
        while not self.stop_event.is_set():
            try:
                await self.check_once()
            except Exception as e:
                logger.warning(f"[REMINDER] Error checking reminders: {e}", exc_info=True)

            if await self._wait(self.check_interval):
                break

        logger.info(f"[STOP] {self.__class__.__name__} stopped")

    async def check_once(self):
        """Run one idle check-in and one reminder pass"""
        if await self.scheduler.is_idle_check_in_due():
            logger.debug("[REMINDER] Idle check-in triggered")
            await self.voice_output.speak(IDLE_CHECK_IN_PROMPT)
            # Avoid repeating the check-in every tick
            self.scheduler.record_interaction()

        due = await self.scheduler.get_due_reminders()
        if due:
            names = ", ".join(r.describe() for r in due)
            logger.info(f"[REMINDER] Paused task reminders due: {names}")
            await self.voice_output.speak(
                f"Reminder: these paused tasks haven't been touched in a while: {names}. "
                "Want to switch to one of them?"
            )
            for reminder in due:
                self.scheduler.acknowledge_reminder(reminder.task_id)
            self.scheduler.record_interaction()

    async def _wait(self, seconds: float) -> bool:
        """Sleep up to seconds; True if stop was requested meanwhile"""
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=seconds)
            return True
        except asyncio.TimeoutError:
            return False
