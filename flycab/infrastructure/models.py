"""
SQLAlchemy ORM models.

Tables
------
* ``bookings`` -- one row per placed booking; ``created_at`` is assigned
  by the database.

Indexes
-------
* **B-Tree** on ``created_at`` for the newest-first recent bookings list.
"""

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, func

from .database import Base


class BookingModel(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    guest_name = Column(String(100), nullable=False)
    start_location = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    taxi_tier = Column(String(50), nullable=False)
    total_price = Column(Float, nullable=False)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (Index("idx_bookings_created_at", "created_at"),)
