"""
Database connection and session management for nullresults.club.

The engine and session factory are built explicitly and handed to the
application factory; request handlers receive sessions through ``get_db``.
"""

from typing import Generator, Optional
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from fastapi import HTTPException, Request
import sqlite3
import logging

from .models import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite URLs share a single connection across threads so that in-memory
    databases survive between requests.
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
        event.listen(engine, "connect", set_sqlite_pragma)
        return engine

    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Set SQLite pragma settings for better performance."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory used as the application's storage handle."""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency function to get a database session.

    Raises a 500 before the handler runs when the application was started
    without a storage handle.
    """
    session_factory: Optional[sessionmaker] = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        logger.error("Request received but no database is configured")
        raise HTTPException(status_code=500, detail="Database not available")

    session = session_factory()
    try:
        yield session
    except SQLAlchemyError as e:
        logger.error(f"Database session error: {e}")
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def get_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside a request.

    Example:
        with get_session(factory) as session:
            session.add(Experiment(title="Test", ...))
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        logger.error(f"Database session error: {e}")
        session.rollback()
        raise
    finally:
        session.close()


def create_tables(engine: Engine):
    """Create all database tables."""
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error creating database tables: {e}")
        raise


def init_db(engine: Engine):
    """Initialize the database with tables."""
    create_tables(engine)


def check_db_connection(session_factory: sessionmaker) -> bool:
    """Check if database connection is working."""
    try:
        with get_session(session_factory) as session:
            session.execute(text("SELECT 1"))
            return True
    except SQLAlchemyError as e:
        logger.error(f"Database connection check failed: {e}")
        return False
