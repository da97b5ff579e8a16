"""
Seed script -- populates the database with sample bookings for reviewers.

Run after migrations:
    python seed.py

Creates one booking per sample trip around Bengaluru, priced with the
same fare engine the API uses.
"""

import asyncio

from sqlalchemy import func, select

from flycab.domain.distance import haversine_km
from flycab.domain.entities import BookingRecord, GeoPoint
from flycab.domain.pricing import get_tier, quote_price
from flycab.infrastructure.database import async_session_factory, engine
from flycab.infrastructure.models import BookingModel
from flycab.infrastructure.repositories import BookingRepository

MG_ROAD = GeoPoint(12.9756, 77.6050, "MG Road")
AIRPORT = GeoPoint(13.1986, 77.7066, "Kempegowda International Airport")
WHITEFIELD = GeoPoint(12.9698, 77.7500, "Whitefield")
ELECTRONIC_CITY = GeoPoint(12.8452, 77.6602, "Electronic City")
HEBBAL = GeoPoint(13.0358, 77.5970, "Hebbal")
KORAMANGALA = GeoPoint(12.9352, 77.6245, "Koramangala")


TRIPS = [
    {"guest": "Aarav Sharma", "pickup": MG_ROAD, "dropoff": AIRPORT, "tier": "royalair"},
    {"guest": "Priya Patel", "pickup": KORAMANGALA, "dropoff": WHITEFIELD, "tier": "skyplus"},
    {"guest": "Rohan Mehta", "pickup": HEBBAL, "dropoff": ELECTRONIC_CITY, "tier": "ecofly"},
    {"guest": "Sneha Gupta", "pickup": AIRPORT, "dropoff": KORAMANGALA, "tier": "skyplus"},
    # Unlabelled points fall back to formatted coordinates
    {
        "guest": "Vikram Singh",
        "pickup": GeoPoint(12.9716, 77.5946),
        "dropoff": GeoPoint(13.0827, 77.5877),
        "tier": "ecofly",
    },
]


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(select(func.count()).select_from(BookingModel))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        repo = BookingRepository(session)
        for trip in TRIPS:
            tier = get_tier(trip["tier"])
            distance = haversine_km(trip["pickup"], trip["dropoff"])
            await repo.create_booking(
                BookingRecord(
                    guest_name=trip["guest"],
                    start_location=trip["pickup"].display_name,
                    destination=trip["dropoff"].display_name,
                    tier_name=tier.name,
                    total_price=round(quote_price(tier, distance), 2),
                )
            )
        print(f"  Created {len(TRIPS)} bookings")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
