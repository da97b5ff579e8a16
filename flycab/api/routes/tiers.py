"""
Tier and quote endpoints
========================

GET /api/v1/tiers  -- the fixed tier catalog
GET /api/v1/quotes -- stateless quote for a pickup / dropoff pair
"""

from fastapi import APIRouter, HTTPException, Query, Request

from flycab.api.middleware import limiter
from flycab.api.schemas import QuoteResponse, TierResponse, TripQuoteResponse
from flycab.config import settings
from flycab.domain.distance import haversine_km
from flycab.domain.entities import GeoPoint, UnknownTierError
from flycab.domain.pricing import TIERS, estimate_flight_minutes, get_tier, quotes_for

router = APIRouter(tags=["tiers"])


@router.get(
    "/tiers",
    response_model=list[TierResponse],
    summary="List pricing tiers",
)
async def list_tiers():
    return [TierResponse.from_tier(tier) for tier in TIERS]


@router.get(
    "/tiers/{tier_id}",
    response_model=TierResponse,
    summary="Get one pricing tier",
)
async def read_tier(tier_id: str):
    try:
        return TierResponse.from_tier(get_tier(tier_id))
    except UnknownTierError as exc:
        raise HTTPException(status_code=404, detail=str(exc))


@router.get(
    "/quotes",
    response_model=TripQuoteResponse,
    summary="Quote every tier for a trip",
)
@limiter.limit(settings.rate_limit)
async def quote_trip(
    request: Request,
    pickup_lat: float = Query(..., ge=-90, le=90),
    pickup_lng: float = Query(..., ge=-180, le=180),
    dropoff_lat: float = Query(..., ge=-90, le=90),
    dropoff_lng: float = Query(..., ge=-180, le=180),
):
    distance = haversine_km(
        GeoPoint(pickup_lat, pickup_lng), GeoPoint(dropoff_lat, dropoff_lng)
    )
    return TripQuoteResponse(
        distance_km=distance,
        estimated_minutes=estimate_flight_minutes(distance, settings.cruise_speed_kmh),
        quotes=[QuoteResponse.from_quote(q) for q in quotes_for(distance)],
    )
