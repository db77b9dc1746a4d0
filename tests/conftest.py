import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_AUTO_CREATE", "false")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("CONTACT_NOTIFY_TO", "team@landing.test")
os.environ.setdefault("EMAIL_FROM", "noreply@landing.test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.rate_limiter import reset_rate_limiter_state
from app.db.base import Base
from app.db.session import get_db
from app.main import app

# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="function")
def db_engine():
    """
    Fresh in-memory SQLite database per test, shared across threads.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    session = sessionmaker(bind=db_engine, autoflush=False)()

    yield session

    session.close()


# -----------------------------------------------------------------------------
# Client Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    reset_rate_limiter_state()
    yield
    reset_rate_limiter_state()


@pytest.fixture(scope="function")
def client(db_session):
    """
    TestClient with get_db overridden to use the isolated db_session.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend():
    # The application runs on asyncio only (asyncio.to_thread in app.core.email)
    return "asyncio"
