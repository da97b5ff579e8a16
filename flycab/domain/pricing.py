"""
Fare Engine
===========

Formula
-------
Price = Base_Fare + Distance x Rate_Per_KM

The tier catalog is a fixed, ordered, data-only table.  Nothing at runtime
mutates it; presentation layers read it through ``TIERS`` or ``get_tier``.

Flight time
-----------
Minutes = ceil(Distance / Cruise_Speed x 60), cruise speed 120 km/h by
default.

Complexity: O(1) per price calculation.
"""

from __future__ import annotations

import math

from .entities import Quote, Tier, UnknownTierError

DEFAULT_CRUISE_SPEED_KMH = 120.0


TIERS: tuple[Tier, ...] = (
    Tier(
        id="ecofly",
        name="EcoFly",
        description="Efficient & Affordable",
        rate_per_km=15.0,
        base_fare=50.0,
    ),
    Tier(
        id="skyplus",
        name="SkyPlus",
        description="Fast & Comfortable",
        rate_per_km=25.0,
        base_fare=100.0,
    ),
    Tier(
        id="royalair",
        name="RoyalAir",
        description="Premium Luxury Experience",
        rate_per_km=45.0,
        base_fare=200.0,
    ),
)

_TIERS_BY_ID: dict[str, Tier] = {tier.id: tier for tier in TIERS}


def get_tier(tier_id: str) -> Tier:
    try:
        return _TIERS_BY_ID[tier_id]
    except KeyError:
        raise UnknownTierError(f"Unknown tier: {tier_id}") from None


def quote_price(tier: Tier, distance_km: float) -> float:
    """Linear fare: non-decreasing in distance for every catalog tier."""
    return tier.base_fare + tier.rate_per_km * distance_km


def quotes_for(distance_km: float) -> list[Quote]:
    """One quote per tier, in catalog order."""
    return [
        Quote(tier=tier, distance_km=distance_km, price=quote_price(tier, distance_km))
        for tier in TIERS
    ]


def estimate_flight_minutes(
    distance_km: float, cruise_speed_kmh: float = DEFAULT_CRUISE_SPEED_KMH
) -> int:
    return math.ceil(distance_km / cruise_speed_kmh * 60)
