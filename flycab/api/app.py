"""
FastAPI application factory.

* Registers routes for tiers, selections, bookings and admin.
* Releases the DB engine and Redis pool via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from flycab.api.middleware import limiter
from flycab.api.routes import admin, bookings, selections, tiers
from flycab.config import settings
from flycab.infrastructure.database import engine
from flycab.infrastructure.redis_client import close_redis

logging.basicConfig(level=settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("FlyCab API starting")
    yield
    await close_redis()
    await engine.dispose()
    logger.info("FlyCab API stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title="FlyCab Booking API",
        description=(
            "Book autonomous flying taxis: pick pickup and dropoff points, "
            "compare straight-line fares across three tiers and place a "
            "booking."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(tiers.router, prefix="/api/v1")
    app.include_router(selections.router, prefix="/api/v1")
    app.include_router(bookings.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
