import asyncio
import logging
import signal
import sys
from typing import Optional

from .core.container import Container, init_container
from .core.logger import setup_logging
from .database import init_db

logger = logging.getLogger(__name__)


async def run(container: Container, stop_event: Optional[asyncio.Event] = None):
    """
    Assistant lifecycle

    STARTUP: create tables, load tasks and the work session, start the
    reminder worker. SHUTDOWN: stop the worker and persist state.
    """
    stop_event = stop_event or asyncio.Event()

    # --- STARTUP ---
    init_db(container.engine())

    tracking = container.tracking_service()
    await tracking.initialize()

    current = tracking.get_current_task()
    if current:
        logger.info(f"[STARTUP] Current task: '{current.name}'")
    paused = tracking.get_paused_tasks()
    if paused:
        logger.info(f"[STARTUP] {len(paused)} paused task(s) waiting")

    worker = container.reminder_worker()
    worker_task = asyncio.create_task(worker.start(), name="reminder_worker")
    logger.info("[OK] Focus assistant running")

    try:
        await stop_event.wait()
    finally:
        # --- SHUTDOWN ---
        logger.warning("[SHUTDOWN] Stopping reminder worker...")
        await worker.stop()
        await worker_task

        await tracking.save()
        container.db_session().close()
        logger.info("[OK] Shutdown complete.")


async def main():
    container = init_container()
    setup_logging(container.config.logging.level(), container.config.logging.file())

    stop_event = asyncio.Event()
    if sys.platform != 'win32':
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

    try:
        await run(container, stop_event)
    except KeyboardInterrupt:
        stop_event.set()


if __name__ == "__main__":
    asyncio.run(main())
