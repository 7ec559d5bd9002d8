from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./data/db/focus.db"

Base = declarative_base()


def create_engine_from_url(url: str = DEFAULT_DATABASE_URL) -> Engine:
    """
    Build the SQLAlchemy engine

    File-backed SQLite URLs get their parent directory created first.
    The reminder worker and the command loop share the engine, so
    SQLite's same-thread check is disabled.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        path = url.split("///", 1)[1] if "///" in url else ""
        if path and path != ":memory:":
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)

    return create_engine(url, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    """
    Create tables that do not exist yet

    Call this on app startup
    """
    # Register ORM models on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("[DB] Schema ready")
