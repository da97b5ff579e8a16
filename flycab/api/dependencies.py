"""FastAPI dependency injection helpers."""

from flycab.config import settings
from flycab.infrastructure.database import async_session_factory
from flycab.infrastructure.redis_client import get_redis
from flycab.infrastructure.repositories import SqlBookingStore
from flycab.infrastructure.selection_store import SelectionSessionStore


def get_booking_store() -> SqlBookingStore:
    """Booking store opening its own session (one transaction per insert)."""
    return SqlBookingStore(async_session_factory)


async def get_selection_store() -> SelectionSessionStore:
    return SelectionSessionStore(
        await get_redis(), ttl_seconds=settings.selection_session_ttl_seconds
    )
