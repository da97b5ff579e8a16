"""
Domain entities and the error hierarchy.

``GeoPoint`` and ``Tier`` are immutable value objects.  ``Quote`` is derived
on demand and never stored; ``BookingRecord`` only exists between
validation and the hand-off to the persistence collaborator.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from .enums import NotificationKind

# ── Errors ────────────────────────────────────────────────────────────


class FlyCabError(Exception):
    """Base class for every domain error."""


class ValidationError(FlyCabError):
    """Input rejected before any side effect took place."""


class UnknownTierError(ValidationError):
    """Raised when a tier id is not part of the catalog."""


class GeometryError(FlyCabError):
    """Malformed coordinates.

    Not raised in normal operation: out-of-range points produce a NaN or
    meaningless distance instead.
    """


class PersistenceError(FlyCabError):
    """The persistence collaborator failed to store a booking."""


class SubmissionInProgressError(FlyCabError):
    """A booking submission is already in flight for this selection."""


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float
    label: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Human-readable label, or ``"lat, lng"`` to 4 decimal places."""
        if self.label:
            return self.label
        return f"{self.lat:.4f}, {self.lng:.4f}"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GeoPoint:
        return cls(lat=data["lat"], lng=data["lng"], label=data.get("label"))


@dataclass(frozen=True)
class Tier:
    id: str
    name: str
    description: str
    rate_per_km: float
    base_fare: float


@dataclass(frozen=True)
class Quote:
    tier: Tier
    distance_km: float
    price: float


@dataclass(frozen=True)
class BookingRecord:
    guest_name: str
    start_location: str
    destination: str
    tier_name: str
    total_price: float


@dataclass(frozen=True)
class BookingConfirmation:
    """What the success dialog shows once a booking is stored."""

    booking_id: int
    guest_name: str
    tier_name: str
    distance_km: float
    estimated_minutes: int
    total_price: float


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    title: str
    message: str
