"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
from pathlib import Path
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Add app to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.database import Base
from app import models  # noqa: F401  (registers tables)
from app.core.repositories.task_repo import TaskRepository
from app.core.repositories.session_repo import SessionRepository
from app.core.repositories.preferences_repo import PreferencesRepository
from app.core.repositories.note_repo import NoteRepository


@pytest.fixture(scope="function")
def test_engine():
    """Create in-memory test database engine"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_engine) -> Generator[Session, None, None]:
    """Create test database session"""
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_engine
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def task_repo(test_session) -> TaskRepository:
    return TaskRepository(test_session)


@pytest.fixture
def session_repo(test_session) -> SessionRepository:
    return SessionRepository(test_session)


@pytest.fixture
def preferences_repo(test_session) -> PreferencesRepository:
    return PreferencesRepository(test_session)


@pytest.fixture
def note_repo(test_session) -> NoteRepository:
    return NoteRepository(test_session)
