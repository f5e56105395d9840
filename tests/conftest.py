"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

import os

# Settings are read at import time; pin test backends before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("LIVENESS_BACKEND", "null")

from urllib.parse import urlparse

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from shortlink_app.cache.strategies import InMemoryCache
from shortlink_app.database.connection import Base, get_db
from shortlink_app.dependencies import get_cache, get_liveness
from shortlink_app.liveness.strategies import LivenessStrategy
from shortlink_app.models import Category, User
from shortlink_app.services.url_service import URLService

# Test database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class StubLiveness(LivenessStrategy):
    """Offline liveness check: every host is alive except the ones listed"""

    def __init__(self, dead_hosts=()):
        self.dead_hosts = set(dead_hosts)
        self.checked = []

    async def is_alive(self, url: str) -> bool:
        self.checked.append(url)
        return urlparse(url).hostname not in self.dead_hosts


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database for each test.
    This ensures tests are isolated and don't affect each other.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session):
    """Extra sessions on the same database (for concurrency tests)"""
    sessions = []

    def make():
        session = TestingSessionLocal()
        sessions.append(session)
        return session

    yield make

    for session in sessions:
        session.close()


@pytest.fixture
def make_user(db_session):
    def make(email="u1@example.com", name="User One", blacklisted=False, is_admin=False):
        user = User(email=email, name=name, blacklisted=blacklisted, is_admin=is_admin)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def other_user(make_user):
    return make_user(email="u2@example.com", name="User Two")


@pytest.fixture
def admin_user(make_user):
    return make_user(email="admin@example.com", name="Admin", is_admin=True)


@pytest.fixture
def make_category(db_session):
    def make(owner, name="team"):
        category = Category(name=name, owner_id=owner.id, url_count=0)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return make


@pytest.fixture
def liveness():
    return StubLiveness(dead_hosts={"dead.example"})


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def service(db_session, cache, liveness):
    return URLService(db_session, cache=cache, liveness=liveness)


@pytest.fixture(scope="function")
def client(db_session, cache, liveness):
    """
    Test client with database, cache and liveness dependencies overridden.
    This is the main fixture that API tests use.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_liveness] = lambda: liveness

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth(user):
    """Headers the upstream gateway would forward for ``user``"""
    return {"X-User-Id": str(user.id)}
