"""
Database connection and session management
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from study_assistant.core.config import settings

# Base class for declarative models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL

    SQLite connections are shared with worker threads, and an in-memory
    SQLite database keeps a single connection so every session sees it.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables that do not exist yet"""
    from study_assistant.db import models  # noqa: F401  registers tables on Base

    Base.metadata.create_all(bind=engine)


engine = create_db_engine(settings.database_url)
SessionLocal = create_session_factory(engine)
