"""
Database utility functions for consistent session management across the application.
"""

import logging
from contextlib import contextmanager
from typing import Callable, Generator, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from meditracker.db.session import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def get_db_session(session_factory: Optional[Callable[[], Session]] = None) -> Generator[Session, None, None]:
    """
    Get a database session with proper cleanup using context manager.

    Commits when the block finishes, rolls back and re-raises on any
    exception, and always closes the session.

    Usage:
        with get_db_session() as db:
            result = db.query(Model).all()

    Args:
        session_factory: Optional sessionmaker to use instead of SessionLocal

    Yields:
        Session: SQLAlchemy database session
    """
    db = (session_factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        db.close()


def check_database_connection(session_factory: Optional[Callable[[], Session]] = None) -> bool:
    """Return True when a trivial query succeeds."""
    try:
        with get_db_session(session_factory) as db:
            db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
