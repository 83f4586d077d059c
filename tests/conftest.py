"""Shared fixtures: in-memory SQLite database, fake clock, app client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from career_guide.core.cache import TTLCache
from career_guide.core.config import Settings, get_settings
from career_guide.db import tables
from career_guide.db.database import get_db
from career_guide.main import create_app


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(max_entries=50, default_ttl=300, sweep_interval=300, clock=clock)


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url="sqlite://", debug=False)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    tables.create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine, settings, cache):
    app = create_app(settings=settings, cache=cache)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
