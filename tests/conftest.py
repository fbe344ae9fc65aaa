import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import Admin, Platform, PredefinedTag, Review  # noqa: F401
from app.schemas.platform import PlatformCreate, Pricing
from app.scripts.create_admin import create_admin
from app.services.moderation import approve_platform
from app.services.store import PlatformStore


@pytest.fixture()
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def store(db):
    return PlatformStore(db)


@pytest.fixture()
def client(db):
    def _override():
        yield db

    app.dependency_overrides[get_db] = _override
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers(db):
    return {"X-Admin-Token": create_admin(db, "tests")}


@pytest.fixture()
def add_platform(store):
    """Insert a platform through the store, approved unless told otherwise."""

    def _add(name="Sample AI", approved=True, **overrides):
        data = {
            "name": name,
            "description": f"{name} is a sample platform used by the test-suite.",
            "url": "https://example.com",
            "tags": ["Productivity"],
            "features": ["Dashboard"],
            "pricing": Pricing(has_free=False),
            "api_available": False,
        }
        data.update(overrides)
        p = store.insert_platform(PlatformCreate(**data))
        assert p is not None
        if approved:
            assert approve_platform(store, p.id)
            p = store.fetch_platform(p.id)
        return p

    return _add
