"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

``BookingRepository`` receives an ``AsyncSession`` (unit-of-work).
``SqlBookingStore`` is the persistence collaborator used by the booking
flow: it owns one transaction per insert, so a failed insert leaves no row.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .models import BookingModel
from flycab.domain.entities import BookingRecord


class BookingRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_booking(self, record: BookingRecord) -> BookingModel:
        booking = BookingModel(
            guest_name=record.guest_name,
            start_location=record.start_location,
            destination=record.destination,
            taxi_tier=record.tier_name,
            total_price=record.total_price,
        )
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def list_recent(self, limit: int) -> list[BookingModel]:
        result = await self.session.execute(
            select(BookingModel)
            .order_by(BookingModel.created_at.desc(), BookingModel.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())


class SqlBookingStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def insert_booking(self, record: BookingRecord) -> int:
        async with self.session_factory() as session:
            async with session.begin():
                booking = await BookingRepository(session).create_booking(record)
            return booking.id

    async def list_recent_bookings(self, limit: int) -> list[BookingModel]:
        async with self.session_factory() as session:
            return await BookingRepository(session).list_recent(limit)
