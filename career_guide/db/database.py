"""
Relational store access - SQLAlchemy engine, sessions and raw SQL helpers.

Routes write plain SQL with named parameters (:name) through `text()`; the
helpers below turn result rows into dicts.
"""

import json
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from career_guide.core.config import get_settings

logger = logging.getLogger(__name__)

# Created lazily so importing the app never opens a connection
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Get or create the engine (singleton pattern)."""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.sqlalchemy_url
        if url.startswith("sqlite"):
            _engine = create_engine(
                url,
                echo=settings.db_echo,
                connect_args={"check_same_thread": False},
            )
        else:
            # pool_size: connections kept ready
            # max_overflow: extra connections allowed under load
            _engine = create_engine(
                url,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=True,
                echo=settings.db_echo,
            )
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def get_db() -> Iterator[Session]:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/careers")
        async def list_careers(db: Session = Depends(get_db)):
            ...
    Mutating routes commit explicitly.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def ping(db: Session) -> bool:
    """
    Test if the database behind `db` is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        row = db.execute(text("SELECT 1 AS ok")).fetchone()
        return row[0] == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False


def check_connection() -> bool:
    """Open a fresh session on the configured database and ping it."""
    session = get_session_factory()()
    try:
        return ping(session)
    finally:
        session.close()


def fetch_all(db: Session, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Run a query and return all rows as a list of dicts."""
    result = db.execute(text(sql), params or {})
    return [dict(row) for row in result.mappings().all()]


def fetch_one(db: Session, sql: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Run a query and return the first row as a dict (or None)."""
    row = db.execute(text(sql), params or {}).mappings().first()
    return dict(row) if row is not None else None


def load_json_columns(row: Dict[str, Any], columns: Iterable[str]) -> Dict[str, Any]:
    """
    Decode JSON list columns in place.

    PostgreSQL drivers already hand back lists; SQLite returns the JSON text.
    """
    for column in columns:
        value = row.get(column)
        if isinstance(value, (str, bytes)):
            row[column] = json.loads(value)
        elif value is None:
            row[column] = []
    return row


def dump_json(value: Any) -> str:
    """Serialize a list/dict for a JSON column bind parameter."""
    return json.dumps(value, ensure_ascii=False)
