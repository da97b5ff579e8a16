"""
Selection endpoints
===================

POST   /api/v1/selections                 -- start an empty selection
GET    /api/v1/selections/{id}            -- current points, distance, quotes
POST   /api/v1/selections/{id}/picks      -- one map click
PUT    /api/v1/selections/{id}/tier       -- choose a tier (both points set)
POST   /api/v1/selections/{id}/booking    -- submit the booking
DELETE /api/v1/selections/{id}            -- discard the selection
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from flycab.api.dependencies import get_booking_store, get_selection_store
from flycab.api.middleware import limiter
from flycab.api.schemas import (
    BookingConfirmationResponse,
    BookingRequest,
    ErrorResponse,
    NotificationResponse,
    PickRequest,
    SelectionResponse,
    TierSelectRequest,
)
from flycab.config import settings
from flycab.domain.booking import BookingFlow
from flycab.domain.entities import (
    GeoPoint,
    PersistenceError,
    SubmissionInProgressError,
    ValidationError,
)
from flycab.domain.selection import SelectionController
from flycab.infrastructure.locks import SubmissionLock
from flycab.infrastructure.notifications import CollectingNotifier
from flycab.infrastructure.repositories import SqlBookingStore
from flycab.infrastructure.selection_store import SelectionSessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/selections", tags=["selections"])


def _log_location(pickup: Optional[GeoPoint], dropoff: Optional[GeoPoint]) -> None:
    logger.debug("Location select: pickup=%s dropoff=%s", pickup, dropoff)


async def _load(store: SelectionSessionStore, session_id: str) -> SelectionController:
    controller = await store.load(session_id, on_location_select=_log_location)
    if controller is None:
        raise HTTPException(status_code=404, detail="Selection not found")
    return controller


def _error_response(
    status_code: int, exc: Exception, notifier: CollectingNotifier
) -> JSONResponse:
    body = ErrorResponse(
        detail=str(exc),
        notifications=[
            NotificationResponse.from_notification(n) for n in notifier.notifications
        ],
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _response(session_id: str, controller: SelectionController) -> SelectionResponse:
    return SelectionResponse.from_controller(
        session_id, controller, settings.cruise_speed_kmh
    )


@router.post(
    "",
    status_code=201,
    response_model=SelectionResponse,
    summary="Start a new selection",
)
@limiter.limit(settings.rate_limit)
async def create_selection(
    request: Request,
    store: SelectionSessionStore = Depends(get_selection_store),
):
    session_id, controller = await store.create()
    return _response(session_id, controller)


@router.get(
    "/{session_id}",
    response_model=SelectionResponse,
    summary="Get the current selection",
)
@limiter.limit(settings.rate_limit)
async def get_selection(
    request: Request,
    session_id: str,
    store: SelectionSessionStore = Depends(get_selection_store),
):
    controller = await _load(store, session_id)
    return _response(session_id, controller)


@router.post(
    "/{session_id}/picks",
    response_model=SelectionResponse,
    summary="Pick a point on the map",
    description=(
        "First pick sets the pickup, second the dropoff, third resets the "
        "selection and clears the chosen tier."
    ),
)
@limiter.limit(settings.rate_limit)
async def pick_point(
    request: Request,
    session_id: str,
    body: PickRequest,
    store: SelectionSessionStore = Depends(get_selection_store),
):
    controller = await _load(store, session_id)
    controller.pick(GeoPoint(lat=body.lat, lng=body.lng, label=body.label))
    await store.save(session_id, controller)
    return _response(session_id, controller)


@router.put(
    "/{session_id}/tier",
    response_model=SelectionResponse,
    summary="Choose a pricing tier",
)
@limiter.limit(settings.rate_limit)
async def select_tier(
    request: Request,
    session_id: str,
    body: TierSelectRequest,
    store: SelectionSessionStore = Depends(get_selection_store),
):
    controller = await _load(store, session_id)
    try:
        controller.select_tier(body.tier_id)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    await store.save(session_id, controller)
    return _response(session_id, controller)


@router.post(
    "/{session_id}/booking",
    status_code=201,
    response_model=BookingConfirmationResponse,
    summary="Book the selected trip",
    responses={
        409: {
            "model": ErrorResponse,
            "description": "A submission for this selection is in flight.",
        },
        422: {
            "model": ErrorResponse,
            "description": "Guest name or selection is incomplete.",
        },
        502: {
            "model": ErrorResponse,
            "description": "The booking could not be stored.",
        },
    },
)
@limiter.limit(settings.rate_limit)
async def book_selection(
    request: Request,
    session_id: str,
    body: BookingRequest,
    store: SelectionSessionStore = Depends(get_selection_store),
    booking_store: SqlBookingStore = Depends(get_booking_store),
):
    notifier = CollectingNotifier()

    try:
        async with SubmissionLock(
            store.redis, session_id, ttl_seconds=settings.submission_lock_ttl_seconds
        ):
            # Loaded under the lock so a request that queued behind a
            # completed booking sees the reset selection.
            controller = await _load(store, session_id)
            flow = BookingFlow(
                booking_store,
                notifier,
                controller=controller,
                cruise_speed_kmh=settings.cruise_speed_kmh,
            )
            confirmation = await flow.submit(body.guest_name)
            # The flow has reset the selection for the next trip
            await store.save(session_id, controller)
    except SubmissionInProgressError as exc:
        return _error_response(409, exc, notifier)
    except ValidationError as exc:
        return _error_response(422, exc, notifier)
    except PersistenceError as exc:
        return _error_response(502, exc, notifier)

    return BookingConfirmationResponse.from_confirmation(
        confirmation, notifier.notifications
    )


@router.delete(
    "/{session_id}",
    status_code=204,
    summary="Discard a selection",
)
@limiter.limit(settings.rate_limit)
async def delete_selection(
    request: Request,
    session_id: str,
    store: SelectionSessionStore = Depends(get_selection_store),
):
    if not await store.delete(session_id):
        raise HTTPException(status_code=404, detail="Selection not found")
