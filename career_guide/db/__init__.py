"""
Database module - SQLAlchemy engine/session wiring, table definitions and
the SELECT builder used by the list endpoints.
"""
from career_guide.db.database import check_connection, get_db, get_engine

__all__ = [
    "check_connection",
    "get_db",
    "get_engine",
]
