"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) and a dict-backed Redis
double so tests run without Docker / PostgreSQL / Redis.
"""

import asyncio
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from flycab.domain.entities import BookingRecord, GeoPoint
from flycab.infrastructure.database import Base
from flycab.infrastructure.repositories import SqlBookingStore
from flycab.infrastructure.selection_store import SelectionSessionStore

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

# Bengaluru: city centre -> Hebbal (~12.4 km)
CITY_CENTRE = GeoPoint(12.9716, 77.5946)
HEBBAL = GeoPoint(13.0827, 77.5877)


# ── Doubles ───────────────────────────────────────────────────────────


class FakeRedis:
    """The handful of Redis commands the service uses, backed by a dict."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.expiry: dict[str, Optional[int]] = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, nx=False, ex=None):
        if nx and key in self.data:
            return None
        self.data[key] = value
        self.expiry[key] = ex
        return True

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed

    async def eval(self, script, numkeys, key, token):
        # Only the check-and-delete release script is used
        if self.data.get(key) == token:
            del self.data[key]
            return 1
        return 0


class GatedRedis(FakeRedis):
    """Holds the next selection read until ``open_gate`` is called."""

    def __init__(self):
        super().__init__()
        self.hold_next_read = False
        self.read_waiting = asyncio.Event()
        self.gate = asyncio.Event()

    async def get(self, key):
        if self.hold_next_read and key.startswith("selection:"):
            self.hold_next_read = False
            self.read_waiting.set()
            await self.gate.wait()
        return await super().get(key)

    def open_gate(self):
        self.gate.set()


class RecordingStore:
    """Persistence collaborator that keeps records in a list."""

    def __init__(self):
        self.records: list[BookingRecord] = []

    async def insert_booking(self, record: BookingRecord) -> int:
        self.records.append(record)
        return len(self.records)

    async def list_recent_bookings(self, limit: int):
        return list(reversed(self.records))[:limit]


class FailingStore(RecordingStore):
    def __init__(self):
        super().__init__()
        self.calls = 0

    async def insert_booking(self, record: BookingRecord) -> int:
        self.calls += 1
        raise ConnectionError("database unavailable")


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create tables on a fresh in-memory DB, yield a factory, then dispose."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def booking_store(session_factory) -> SqlBookingStore:
    return SqlBookingStore(session_factory)


@pytest_asyncio.fixture
async def make_client(session_factory, fake_redis):
    """Build an AsyncClient; ``store=`` and ``redis=`` swap the collaborators."""
    from flycab.api.app import create_app
    from flycab.api.dependencies import get_booking_store, get_selection_store
    from flycab.api.middleware import limiter

    limiter.enabled = False
    clients: list[AsyncClient] = []

    async def _factory(store=None, redis=None) -> AsyncClient:
        app = create_app()
        app.dependency_overrides[get_booking_store] = lambda: (
            store if store is not None else SqlBookingStore(session_factory)
        )
        app.dependency_overrides[get_selection_store] = lambda: SelectionSessionStore(
            redis if redis is not None else fake_redis, ttl_seconds=60
        )

        client = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(client)
        return client

    yield _factory

    for client in clients:
        await client.aclose()
    limiter.enabled = True


@pytest_asyncio.fixture
async def client(make_client) -> AsyncClient:
    return await make_client()
