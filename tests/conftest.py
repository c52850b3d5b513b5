"""
Shared fixtures.

The application reads DATABASE_URL at import time, so the temporary SQLite
database is configured here before anything from `app` is imported.
Redis is replaced by fakeredis (with Lua support for the lock release script).
"""
import os
import tempfile

_TMP_DIR = tempfile.mkdtemp(prefix="joyville-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR}/test.db"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.data import models  # noqa: F401  registers every table on Base.metadata
from app.data.database import Base, SessionLocal, engine
from app.data.models.product import ProductModel
from app.services.lock_service import LockService

from tests.support import RecordingNotifier


@pytest.fixture(autouse=True)
def clean_database():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client, ttl=30, wait_seconds=5)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_product(db):
    """Factory creating catalog products."""

    def _make(name="Cuddly Bear", price="10.00", section="retail", inventory=50, is_active=True):
        product = ProductModel(
            name=name,
            price=Decimal(price),
            section=section,
            inventory=inventory,
            is_active=is_active,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def test_client(lock_service, notifier):
    """
    TestClient with Redis-backed collaborators swapped for in-memory ones.
    Tables are created by `clean_database`, so the lifespan is not started.
    """
    from app.main import app
    from app.api.deps import get_lock_service, get_notifier

    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_notifier] = lambda: notifier

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
