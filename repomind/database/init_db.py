"""
Database Initialization - Create tables for codebases, files and questions.
"""
from repomind.core.logging_config import get_logger
from repomind.database.connection import get_database
from repomind.database.models import Base

logger = get_logger(__name__)


def init_tables() -> bool:
    """
    Create tables if they don't exist.

    Called once during application startup.

    Returns:
        True if tables were created successfully
    """
    try:
        db = get_database()
        Base.metadata.create_all(db.engine)
        logger.info("Database tables initialized successfully")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise


def drop_tables() -> bool:
    """
    Drop all tables (use with caution!).

    Returns:
        True if tables were dropped successfully
    """
    try:
        db = get_database()
        Base.metadata.drop_all(db.engine)
        logger.warning("Database tables dropped")
        return True

    except Exception as e:
        logger.error(f"Failed to drop database tables: {e}")
        raise


if __name__ == "__main__":
    print("Initializing database tables...")
    init_tables()
    print("Done!")
