"""
Database package for nullresults.club.

Engine, session and model setup for the experiments table.
"""

from .models import Base, Experiment
from .database import (
    create_db_engine,
    create_session_factory,
    get_db,
    init_db,
    create_tables,
    get_session,
    check_db_connection,
)

__all__ = [
    "Base",
    "Experiment",
    "create_db_engine",
    "create_session_factory",
    "get_db",
    "init_db",
    "create_tables",
    "get_session",
    "check_db_connection"
]
