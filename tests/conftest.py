"""
Pytest configuration and fixtures.

Every test gets its own file backed SQLite database and its own fake redis
server, the app dependencies are overridden to use them.
"""
import os

# must be set before anything from app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_PRODUCTS"] = "false"
os.environ.setdefault("CART_LOCK_WAIT_ATTEMPTS", "5")

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.data.database import get_db, init_db, make_engine, make_session_factory
from app.data.seed import PRODUCTS, seed
from app.main import app
from app.services.cart_service import CartService
from app.services.lock_service import LockService, get_lock_service


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'store.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def products(session_factory):
    """Seeds the product catalogue and returns it keyed by id."""
    seed(session_factory)
    return {p["id"]: p for p in PRODUCTS}


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def lock_service(redis_client):
    return LockService(client=redis_client)


# ============================================================================
# Service / API Fixtures
# ============================================================================

@pytest.fixture
def cart_service(db, lock_service, products):
    return CartService(db=db, lock_service=lock_service)


@pytest.fixture
def test_client(session_factory, lock_service, products):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service

    yield TestClient(app)

    app.dependency_overrides.clear()
