"""
Pytest fixtures for backend tests.
"""

import os
import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")

from app.main import app
from app.config import get_settings
from app.dependencies.db import get_db
from app.dependencies.notifications import get_registration_notifier
from app.models import Base
from app.services.interfaces.notifier import IRegistrationNotifier


class RecordingNotifier(IRegistrationNotifier):
    """Collects registration links instead of logging them."""

    def __init__(self):
        self.sent = []

    def send_registration_link(self, intention, registration_link):
        self.sent.append((intention.email, registration_link))


# --- Fixtures ---

@pytest.fixture(scope="session")
def settings():
    """Get application settings."""
    return get_settings()


@pytest.fixture
def admin_headers(settings) -> dict:
    return {"Authorization": f"Bearer {settings.admin_token}"}


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest_asyncio.fixture(scope="function")
async def session_factory() -> AsyncGenerator[Callable[[], AsyncSession], None]:
    """
    Fresh in-memory database per test.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a database session for testing.
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def async_client(session_factory, notifier) -> AsyncGenerator[AsyncClient, None]:
    """
    Async test client for FastAPI, bound to the per-test database.
    """
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registration_notifier] = lambda: notifier
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# --- Workflow helpers ---

def _intention_payload(email: str = "a@x.com", **overrides) -> dict:
    payload = {"name": "A", "email": email, "company": "C", "reason": "R"}
    payload.update(overrides)
    return payload


@pytest.fixture
def intention_payload() -> Callable[..., dict]:
    return _intention_payload


@pytest.fixture
def profile() -> dict:
    return {"phone": "123", "profession": "Dev", "segment": "Tech"}


@pytest_asyncio.fixture
async def approved(async_client, admin_headers) -> dict:
    """
    A submitted and approved intention; returns the approval body.
    """
    created = await async_client.post("/api/intentions", json=_intention_payload("approved@x.com"))
    assert created.status_code == 201
    response = await async_client.patch(
        f"/api/intentions/{created.json()['id']}/approve", headers=admin_headers
    )
    assert response.status_code == 200
    return response.json()


@pytest_asyncio.fixture
async def registered_member(async_client, approved, profile) -> dict:
    """
    A member whose registration has been completed through the token.
    """
    token = approved["intention"]["token"]
    response = await async_client.post(f"/api/members/register/{token}", json=profile)
    assert response.status_code == 200
    return response.json()
