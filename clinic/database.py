"""
Database connection and session management.
Provides SQLAlchemy engine, session, and base class for models.
"""
from contextlib import contextmanager
import logging
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from .config import settings
from .exceptions import InternalServerException

# Set up logging
logger = logging.getLogger(__name__)

# Create SQLAlchemy engine for database connection
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=connect_args)

# Create session factory for database sessions
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

# Create base class for declarative models
Base = declarative_base()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores FOREIGN KEY clauses unless the pragma is set per connection."""
    if dbapi_connection.__class__.__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """
    Database dependency - Creates and yields a database session.
    
    One session is used per request; service functions commit the unit of
    work once and roll back on failure. The session is closed after the
    request is processed, even if an exception occurs during handling.
    
    Yields:
        SQLAlchemy Session: Database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, failure_message: str = "Database operation failed"):
    """
    Run a unit of work that commits once at the end.

    Any error rolls back everything staged inside the block, so callers never
    observe a partial cascade. Store failures surface as a 500.

    Args:
        db: Database session
        failure_message: Error reported if the store fails

    Raises:
        InternalServerException: If SQLAlchemy raises while staging or committing
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"{failure_message}: {str(e)}")
        raise InternalServerException(failure_message, str(e))
    except Exception:
        db.rollback()
        raise
