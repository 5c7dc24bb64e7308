# tests/conftest.py
# PURPOSE: TestClient over a temp SQLite file, plus helpers to sign users up.

# Ensure project root is on sys.path so `import planner` works when running pytest.
import sys, os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from datetime import datetime, timezone
import tempfile
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from planner import db_models  # noqa: F401  (registers tables)
from planner.db import Base
from planner.main import app
from planner.models import Task
from planner.rate_limit import reset_rate_limits
from planner.store_db import get_db

API = "/api/v1"


@pytest.fixture()
def session_factory():
    # Temporary SQLite file so data is isolated per test
    tmp = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp.close()
    engine = create_engine(f"sqlite:///{tmp.name}", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    reset_rate_limits()

    yield TestingSessionLocal

    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    os.unlink(tmp.name)


@pytest.fixture()
def client(session_factory):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def make_user(client):
    """Register + log in a user; returns the Authorization headers."""

    def _make(email: str = "learner@example.com", password: str = "secret-123") -> dict:
        r = client.post(f"{API}/auth/register", json={"email": email, "password": password})
        assert r.status_code == 201, r.text
        r = client.post(f"{API}/auth/login", data={"username": email, "password": password})
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _make


@pytest.fixture()
def auth_client(client, make_user):
    """TestClient already carrying a valid bearer token."""
    client.headers.update(make_user())
    return client


def make_task(
    title: str = "Task",
    *,
    category: str = "Mathematics",
    priority: str = "medium",
    status: str = "pending",
    description: str | None = None,
    due_date: datetime | None = None,
    created_at: datetime | None = None,
    task_id: str = "t",
) -> Task:
    """Build an in-memory Task for the pure analytics tests."""
    created = created_at or datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)
    return Task(
        id=task_id,
        title=title,
        description=description,
        category=category,
        priority=priority,
        status=status,
        due_date=due_date,
        created_at=created,
        updated_at=created,
        user_id="u1",
    )
