"""
Database Connection Management.

This module handles the SQLAlchemy engine and session lifecycle.
It provides:
- Connection pooling
- Session management
- Health checks
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from repomind.core.config import get_settings
from repomind.core.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseConnection:
    """
    Manages database connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection("sqlite:///./repomind.db")
        >>> with db.get_session() as session:
        ...     result = session.execute(text("SELECT 1"))
    """

    def __init__(self, connection_url: Optional[str] = None):
        """
        Initialize database engine.

        Args:
            connection_url: Optional connection URL. If not provided, uses settings.
        """
        db_url = connection_url or get_settings().database_url
        self.url = db_url

        if db_url.startswith("sqlite"):
            # SQLite connections are shared across the request threadpool
            self.engine = create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                echo=False,
            )
        else:
            # pool_pre_ping: Test connections before using (handles stale connections)
            self.engine = create_engine(
                db_url,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10,
                echo=False,
            )

        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
        )

        logger.info(f"Database connection initialized: {db_url.split('@')[-1] if '@' in db_url else db_url}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic cleanup.

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            logger.debug("Database connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self):
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")


# Module-level instance (singleton pattern)
_db_connection: DatabaseConnection | None = None


def get_database() -> DatabaseConnection:
    """
    Get or create the database connection instance.

    This lazy initialization prevents connection before app startup.

    Returns:
        DatabaseConnection singleton instance
    """
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection()
    return _db_connection


def reset_database() -> None:
    """Dispose and forget the singleton (useful for testing)."""
    global _db_connection
    if _db_connection is not None:
        _db_connection.close()
    _db_connection = None
