"""
Pytest fixtures for testing
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from recurrence_engine.config import get_settings
from recurrence_engine.infrastructure.db.session import Base
import recurrence_engine.infrastructure.db.models  # noqa: F401  (registers tables)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Pin calendar settings so results do not depend on the host environment."""
    monkeypatch.setenv("TIMEZONE", "UTC")
    monkeypatch.setenv("DATE_FORMAT", "%m/%d/%Y")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_engine():
    """Create in-memory SQLite engine for tests"""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Session:
    """Create database session for tests"""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
