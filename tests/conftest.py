"""
Pytest fixtures for testing
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from habitgrid.infrastructure.db.session import Base
from habitgrid.infrastructure.db import models  # noqa: F401  (registers tables)


@pytest.fixture
def db_engine():
    """In-memory SQLite engine shared by every connection of one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

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


@pytest.fixture
def sample_owner_id():
    """Sample owner ID for tests"""
    return "user-123"


@pytest.fixture
def client(db_session, sample_owner_id):
    """API client bound to the test session and the sample owner"""
    from habitgrid.main import app
    from habitgrid.api.deps import get_db, get_current_owner

    def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_current_owner] = lambda: sample_owner_id
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
