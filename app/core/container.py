"""
Dependency Injection Container

Implements Dependency Inversion Principle (DIP):
- Central place to configure dependencies
- Easy to swap implementations (e.g. a real speech engine for voice_output)
- Easy to test (can override providers)

Uses dependency-injector library for IoC container
"""

import os
from typing import Mapping, Optional

from dependency_injector import containers, providers
from sqlalchemy.orm import Session, sessionmaker

from ..database import DEFAULT_DATABASE_URL, create_engine_from_url, create_session_factory

# Repositories
from .repositories.task_repo import TaskRepository
from .repositories.session_repo import SessionRepository
from .repositories.preferences_repo import PreferencesRepository
from .repositories.note_repo import NoteRepository

# Services
from .services.task_tracking_service import TaskTrackingService
from .services.reminder_scheduler import ReminderScheduler
from .services.task_command_service import TaskCommandService

# Drivers / Workers
from .drivers.logging_voice import LoggingVoiceOutput
from .workers.reminder_worker import ReminderWorker


DEFAULT_SETTINGS = {
    "database": {
        "url": DEFAULT_DATABASE_URL,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "reminder": {
        "check_seconds": 30.0,
        "startup_delay_seconds": 5.0,
    },
}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> dict:
    """
    Built-in defaults overlaid with FOCUS_* environment variables

    Raises:
        ValueError: If a numeric variable cannot be parsed
    """
    environ = os.environ if environ is None else environ

    return {
        "database": {
            "url": environ.get("FOCUS_DATABASE_URL", DEFAULT_SETTINGS["database"]["url"]),
        },
        "logging": {
            "level": environ.get("FOCUS_LOG_LEVEL", DEFAULT_SETTINGS["logging"]["level"]),
            "file": environ.get("FOCUS_LOG_FILE") or None,
        },
        "reminder": {
            "check_seconds": float(environ.get(
                "FOCUS_REMINDER_CHECK_SECONDS", DEFAULT_SETTINGS["reminder"]["check_seconds"]
            )),
            "startup_delay_seconds": float(environ.get(
                "FOCUS_REMINDER_STARTUP_DELAY_SECONDS", DEFAULT_SETTINGS["reminder"]["startup_delay_seconds"]
            )),
        },
    }


def _open_session(session_factory: sessionmaker) -> Session:
    return session_factory()


class Container(containers.DeclarativeContainer):
    """
    Main DI Container

    Single user, single process: one engine, one session, one instance of
    each repository and service shared by the command loop and the
    reminder worker.
    """

    # ========== Configuration ==========
    config = providers.Configuration()

    # ========== Database ==========
    engine = providers.Singleton(
        create_engine_from_url,
        url=config.database.url
    )

    session_factory = providers.Singleton(
        create_session_factory,
        engine=engine
    )

    db_session = providers.Singleton(
        _open_session,
        session_factory=session_factory
    )

    # ========== Repositories ==========
    task_repository = providers.Singleton(
        TaskRepository,
        session=db_session
    )

    session_repository = providers.Singleton(
        SessionRepository,
        session=db_session
    )

    preferences_repository = providers.Singleton(
        PreferencesRepository,
        session=db_session
    )

    note_repository = providers.Singleton(
        NoteRepository,
        session=db_session
    )

    # ========== Services ==========
    tracking_service = providers.Singleton(
        TaskTrackingService,
        task_repo=task_repository,
        session_repo=session_repository
    )

    reminder_scheduler = providers.Singleton(
        ReminderScheduler,
        tracking=tracking_service,
        preferences_repo=preferences_repository
    )

    command_service = providers.Singleton(
        TaskCommandService,
        tracking=tracking_service,
        note_repo=note_repository,
        preferences_repo=preferences_repository
    )

    # ========== Drivers ==========
    voice_output = providers.Singleton(
        LoggingVoiceOutput
    )

    # ========== Workers ==========
    reminder_worker = providers.Singleton(
        ReminderWorker,
        scheduler=reminder_scheduler,
        voice_output=voice_output,
        check_interval=config.reminder.check_seconds,
        startup_delay=config.reminder.startup_delay_seconds
    )


# Global container instance
container = Container()


def init_container(overrides: Optional[dict] = None) -> Container:
    """
    Initialize container

    Call this on app startup. overrides is merged over the environment
    settings (tests pass an in-memory database URL here).
    """
    container.config.from_dict(load_settings())
    if overrides:
        container.config.from_dict(overrides)
    return container


def reset_container():
    """
    Reset container

    Useful for testing
    """
    container.reset_singletons()
