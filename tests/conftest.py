"""
Pytest configuration and fixtures

Every test gets a fresh in-memory SQLite database. Redis caching is disabled
so nothing reaches a live server.
"""
import pytest
import sys
import os

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["CACHE_ENABLED"] = "false"
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-key")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import Base, get_db
import models  # noqa: F401  (registers tables on Base.metadata)


# One connection shared across threads so TestClient sees the same database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=test_engine,
    expire_on_commit=False,
)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a database session on a freshly created schema.

    Tables are dropped after the test, so nothing leaks between tests.
    """
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """API client whose requests share the test's database session."""
    from main import app

    def _override_get_db():
        try:
            yield db_session
            db_session.commit()
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
