"""Engine, session factory and declarative base."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from mockflow.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def engine_options(database_url: str) -> dict[str, Any]:
    """Keyword arguments for ``create_engine`` suited to the database backend."""
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.database_echo}
    if database_url.startswith("sqlite"):
        # One connection is shared across FastAPI's worker threads
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


engine = create_engine(settings.database_url, **engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_database(db: Session) -> bool:
    """Whether the database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False
    return True


def init_db() -> None:
    """Create all tables. Deployed databases use the Alembic migrations instead."""
    from mockflow import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Created database tables")
