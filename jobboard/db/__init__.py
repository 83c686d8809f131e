"""
Database module - SQLAlchemy engine, session factory and declarative base.
"""
from jobboard.db.session import (
    Base, SessionLocal, commit_or_conflict, get_db, get_db_session, init_db, ping_database
)

__all__ = [
    "Base",
    "SessionLocal",
    "commit_or_conflict",
    "get_db",
    "get_db_session",
    "init_db",
    "ping_database",
]
