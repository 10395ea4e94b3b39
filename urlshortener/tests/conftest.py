import os

# Settings are read at import time; pin them before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_HOST"] = ""
os.environ["BASE_URL"] = "http://sho.rt"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from urlshortener.api.deps import get_cache
from urlshortener.db import database
from urlshortener.db.models import Base
from urlshortener.db.repository import SqlAlchemyMappingStore
from urlshortener.main import app
from urlshortener.services.shortener import MappingService


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_URL = "http://sho.rt"


@pytest.fixture
def db_session():
    """Creates a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db_session):
    return SqlAlchemyMappingStore(db_session)


@pytest.fixture
def service(store):
    return MappingService(store, base_url=BASE_URL)


@pytest.fixture
def client(db_session):
    """Creates a test client with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[database.get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]


class FakeRedis:
    """Dictionary-backed stand-in for the handful of Redis calls the cache makes."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value

    def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture
def fake_redis():
    return FakeRedis()
