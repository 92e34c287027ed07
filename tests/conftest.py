import os

# prep_kitchen.db requires DATABASE_URL at import time; tests swap in their own engine
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import prep_kitchen.config as config_mod
import prep_kitchen.db as db
from prep_kitchen.main import app
from prep_kitchen.models import Base, MenuItem, Recipe
from prep_kitchen.rate_limit import limiter

# Test admin credentials
TEST_ADMIN_USERNAME = "testadmin"
TEST_ADMIN_PASSWORD = "testpassword123"


def _seed(session):
    """Minimal catalog: portion variants, a steak, a fry item and an inactive item."""
    caesar_recipe = Recipe(
        name="Caesar Salad",
        ingredients=[{"item": "romaine", "quantity": "4", "measure": "oz"}],
        method="Toss and plate.",
    )
    session.add(caesar_recipe)
    session.flush()

    session.add_all([
        MenuItem(name="Half Caesar", station="salad", category="SALAD", recipe_id=caesar_recipe.id),
        MenuItem(name="Caesar Salad", station="salad", category="SALAD", recipe_id=caesar_recipe.id),
        MenuItem(name="Ribeye Steak", station="grill", category="ENTREES"),
        MenuItem(name="Fried Pickles", station="fry", category="APPS"),
        MenuItem(name="Old Special", station="line", is_active=False),
    ])
    session.commit()


@pytest.fixture
def engine():
    """In-memory SQLite engine. StaticPool keeps every connection on the same database."""
    test_engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = factory()
    _seed(session)
    session.close()
    return factory


@pytest.fixture
def db_session(session_factory):
    """Seeded session for service-level tests."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine, session_factory, monkeypatch):
    """Shared FastAPI TestClient using an in-memory SQLite DB.

    Sets up test admin credentials and disables rate limiting.
    """
    monkeypatch.setattr(config_mod, "ADMIN_USERNAME", TEST_ADMIN_USERNAME)
    monkeypatch.setattr(config_mod, "ADMIN_PASSWORD", TEST_ADMIN_PASSWORD)
    monkeypatch.setattr(limiter, "enabled", False)

    # Patch the db module used by the app
    monkeypatch.setattr(db, "engine", engine)
    monkeypatch.setattr(db, "SessionLocal", session_factory)

    def override_get_db():
        db_sess = session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_auth():
    """Returns HTTP Basic Auth tuple for admin endpoints."""
    return (TEST_ADMIN_USERNAME, TEST_ADMIN_PASSWORD)


@pytest.fixture
def menu_ids(db_session):
    """Menu item ids by name."""
    return {item.name: item.id for item in db_session.query(MenuItem).all()}
