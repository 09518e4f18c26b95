"""
Database configuration and session management
"""

from contextlib import contextmanager
from typing import Iterator

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.exc import SQLAlchemyError
import structlog

from weddingflow.core.config import get_settings
from weddingflow.core.exceptions import InternalFailureError

logger = structlog.get_logger(__name__)
settings = get_settings()


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DEBUG and settings.ENVIRONMENT != "test"}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    options["isolation_level"] = settings.DB_ISOLATION_LEVEL
    return options


# Create engine
engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))


def init_db():
    """Initialize database tables"""
    import weddingflow.models  # noqa: F401  registers all table models

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created")


def get_session():
    """Dependency to get database session"""
    with Session(engine) as session:
        yield session


@contextmanager
def atomic(session: Session, operation: str) -> Iterator[Session]:
    """Run a unit of work in one transaction.

    Commits when the block exits cleanly. Any exception rolls the whole
    transaction back; storage errors are re-raised as InternalFailureError so
    callers never see driver-specific exceptions.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("transaction_failed", operation=operation, error=str(e))
        raise InternalFailureError(f"Failed to {operation}") from e
    except Exception:
        session.rollback()
        raise
