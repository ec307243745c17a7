"""
Pytest fixtures for test database, client, and services.

Every test gets its own SQLite file so concurrent sessions behave like they
do against the real embedded store.
"""

import os

# Must be set before eventhub.main builds its settings
os.environ["REDIS_ENABLED"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["REGISTRATION_GUARD"] = "lock"

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from eventhub.main import app
from eventhub.db.base import Base
from eventhub.db.session import create_sessionmaker, get_db
from eventhub.models.event import Event
from eventhub.services.event_store import EventStore
from eventhub.services.interfaces import EventLockGuard
from eventhub.services.registration_service import RegistrationService
from eventhub.services.strategy_factory import get_registration_guard


@pytest_asyncio.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh database file with the schema created."""
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'eventhub_test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    # One guard per test: asyncio locks must not outlive the test event loop
    guard = EventLockGuard()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registration_guard] = lambda: guard

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def event_store(db_session: AsyncSession) -> EventStore:
    return EventStore(db_session)


@pytest.fixture
def registration_service(db_session: AsyncSession, event_store: EventStore) -> RegistrationService:
    return RegistrationService(db_session, event_store, EventLockGuard())


@pytest.fixture
def make_event(db_session: AsyncSession) -> Callable:
    """Insert an event directly, bypassing the store (e.g. pre-seeded attendees)."""

    async def _make_event(**overrides) -> Event:
        fields = {
            "title": "Python Meetup",
            "description": "Monthly talks and pizza",
            "date": "2026-11-20",
            "time": "18:30",
            "location": "Pune, Maharashtra",
            "capacity": 10,
            "attendees": 0,
            "category": "tech",
            "image": None,
            "price": 0,
        }
        fields.update(overrides)
        event = Event(**fields)
        db_session.add(event)
        await db_session.commit()
        await db_session.refresh(event)
        return event

    return _make_event


@pytest_asyncio.fixture
async def test_event(make_event) -> Event:
    """An event with 10 seats and no registrations."""
    return await make_event()


@pytest.fixture
def registration_payload() -> Callable[..., dict]:
    """Request body in the camelCase shape the API accepts."""

    def _payload(event_id: int, tickets: int = 1, **overrides) -> dict:
        body = {
            "eventId": event_id,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "phone": "+91 98765 43210",
            "tickets": tickets,
            "comments": "",
        }
        body.update(overrides)
        return body

    return _payload
