"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from flycab.domain.entities import (
    BookingConfirmation,
    GeoPoint,
    Notification,
    Quote,
    Tier,
)
from flycab.domain.pricing import estimate_flight_minutes
from flycab.domain.selection import SelectionController


# ── Requests ──────────────────────────────────────────────────────────


class PickRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    label: Optional[str] = Field(None, max_length=255)


class TierSelectRequest(BaseModel):
    tier_id: str


class BookingRequest(BaseModel):
    # Length rules are enforced by the domain so every path reports them
    # the same way.
    guest_name: Optional[str] = None


# ── Responses ─────────────────────────────────────────────────────────


class TierResponse(BaseModel):
    id: str
    name: str
    description: str
    base_fare: float
    rate_per_km: float

    @classmethod
    def from_tier(cls, tier: Tier) -> TierResponse:
        return cls(
            id=tier.id,
            name=tier.name,
            description=tier.description,
            base_fare=tier.base_fare,
            rate_per_km=tier.rate_per_km,
        )


class QuoteResponse(BaseModel):
    tier_id: str
    tier_name: str
    distance_km: float
    price: float

    @classmethod
    def from_quote(cls, quote: Quote) -> QuoteResponse:
        return cls(
            tier_id=quote.tier.id,
            tier_name=quote.tier.name,
            distance_km=quote.distance_km,
            price=quote.price,
        )


class TripQuoteResponse(BaseModel):
    distance_km: float
    estimated_minutes: int
    quotes: list[QuoteResponse]


class PointResponse(BaseModel):
    lat: float
    lng: float
    label: Optional[str] = None
    display_name: str

    @classmethod
    def from_point(cls, point: Optional[GeoPoint]) -> Optional[PointResponse]:
        if point is None:
            return None
        return cls(
            lat=point.lat,
            lng=point.lng,
            label=point.label,
            display_name=point.display_name,
        )


class SelectionResponse(BaseModel):
    id: str
    phase: str
    pickup: Optional[PointResponse] = None
    dropoff: Optional[PointResponse] = None
    distance_km: Optional[float] = None
    estimated_minutes: Optional[int] = None
    quotes: list[QuoteResponse] = []
    selected_tier_id: Optional[str] = None
    selected_quote: Optional[QuoteResponse] = None

    @classmethod
    def from_controller(
        cls,
        session_id: str,
        controller: SelectionController,
        cruise_speed_kmh: float,
    ) -> SelectionResponse:
        distance = controller.distance_km
        quote = controller.quote
        return cls(
            id=session_id,
            phase=controller.phase.value,
            pickup=PointResponse.from_point(controller.pickup),
            dropoff=PointResponse.from_point(controller.dropoff),
            distance_km=distance,
            estimated_minutes=(
                estimate_flight_minutes(distance, cruise_speed_kmh)
                if distance is not None
                else None
            ),
            quotes=[QuoteResponse.from_quote(q) for q in controller.quotes()],
            selected_tier_id=(
                controller.selected_tier.id if controller.selected_tier else None
            ),
            selected_quote=QuoteResponse.from_quote(quote) if quote else None,
        )


class NotificationResponse(BaseModel):
    kind: str
    title: str
    message: str

    @classmethod
    def from_notification(cls, notification: Notification) -> NotificationResponse:
        return cls(
            kind=notification.kind.value,
            title=notification.title,
            message=notification.message,
        )


class BookingConfirmationResponse(BaseModel):
    booking_id: int
    guest_name: str
    tier_name: str
    distance_km: float
    estimated_minutes: int
    total_price: float
    notifications: list[NotificationResponse] = []

    @classmethod
    def from_confirmation(
        cls,
        confirmation: BookingConfirmation,
        notifications: list[Notification],
    ) -> BookingConfirmationResponse:
        return cls(
            booking_id=confirmation.booking_id,
            guest_name=confirmation.guest_name,
            tier_name=confirmation.tier_name,
            distance_km=confirmation.distance_km,
            estimated_minutes=confirmation.estimated_minutes,
            total_price=confirmation.total_price,
            notifications=[
                NotificationResponse.from_notification(n) for n in notifications
            ],
        )


class BookingResponse(BaseModel):
    id: int
    guest_name: str
    start_location: str
    destination: str
    taxi_tier: str
    total_price: float
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
    notifications: list[NotificationResponse] = []
