"""
Booking submission.

``submit_booking`` validates the guest name and the selection, builds a
``BookingRecord`` and makes exactly one insert call on the store.  There is
no retry and no idempotency key: a caller that retries after a timeout may
create a duplicate booking.

``BookingFlow`` drives one selection end to end.  It owns the in-flight
flag that rejects a second submit while the first is unresolved, reports
every outcome through the notifier, and only resets the selection when the
booking was actually stored.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from .entities import (
    BookingConfirmation,
    BookingRecord,
    GeoPoint,
    PersistenceError,
    SubmissionInProgressError,
    Tier,
    ValidationError,
)
from .enums import NotificationKind
from .pricing import DEFAULT_CRUISE_SPEED_KMH, estimate_flight_minutes
from .selection import SelectionController

logger = logging.getLogger(__name__)

GUEST_NAME_MIN_LENGTH = 2
GUEST_NAME_MAX_LENGTH = 100


# ── Collaborators ─────────────────────────────────────────────────────


class BookingStore(Protocol):
    async def insert_booking(self, record: BookingRecord) -> int: ...

    async def list_recent_bookings(self, limit: int) -> Sequence: ...


class Notifier(Protocol):
    def notify(self, kind: NotificationKind, title: str, message: str) -> None: ...


# ── Submission ────────────────────────────────────────────────────────


def validate_guest_name(guest_name: Optional[str]) -> str:
    """Return the trimmed name or raise ``ValidationError``."""
    name = (guest_name or "").strip()
    if len(name) < GUEST_NAME_MIN_LENGTH:
        raise ValidationError(
            f"Guest name must be at least {GUEST_NAME_MIN_LENGTH} characters"
        )
    if len(name) > GUEST_NAME_MAX_LENGTH:
        raise ValidationError(
            f"Guest name must be at most {GUEST_NAME_MAX_LENGTH} characters"
        )
    return name


async def submit_booking(
    store: BookingStore,
    guest_name: Optional[str],
    pickup: Optional[GeoPoint],
    dropoff: Optional[GeoPoint],
    tier: Optional[Tier],
    price: Optional[float],
) -> int:
    """Persist one booking and return its id."""
    name = validate_guest_name(guest_name)
    missing = [
        field
        for field, value in (
            ("pickup", pickup),
            ("dropoff", dropoff),
            ("tier", tier),
            ("price", price),
        )
        if value is None
    ]
    if missing:
        raise ValidationError(f"Missing booking details: {', '.join(missing)}")

    record = BookingRecord(
        guest_name=name,
        start_location=pickup.display_name,
        destination=dropoff.display_name,
        tier_name=tier.name,
        total_price=price,
    )

    try:
        booking_id = await store.insert_booking(record)
    except Exception as exc:
        logger.exception("Failed to store booking for %s", name)
        raise PersistenceError("Could not save the booking") from exc

    logger.info(
        "Booking %s stored: %s, %s, %.2f", booking_id, name, tier.name, price
    )
    return booking_id


# ── Flow ──────────────────────────────────────────────────────────────


class BookingFlow:
    def __init__(
        self,
        store: BookingStore,
        notifier: Notifier,
        controller: Optional[SelectionController] = None,
        cruise_speed_kmh: float = DEFAULT_CRUISE_SPEED_KMH,
    ):
        self.store = store
        self.notifier = notifier
        self.controller = controller or SelectionController()
        self.cruise_speed_kmh = cruise_speed_kmh
        self.is_submitting = False

    async def submit(self, guest_name: Optional[str]) -> BookingConfirmation:
        if self.is_submitting:
            raise SubmissionInProgressError("A booking is already being submitted")

        controller = self.controller
        quote = controller.quote

        self.is_submitting = True
        try:
            booking_id = await submit_booking(
                self.store,
                guest_name,
                controller.pickup,
                controller.dropoff,
                controller.selected_tier,
                quote.price if quote else None,
            )
        except ValidationError as exc:
            self.notifier.notify(NotificationKind.ERROR, "Invalid booking", str(exc))
            raise
        except PersistenceError:
            self.notifier.notify(
                NotificationKind.ERROR,
                "Booking failed",
                "We could not place your booking. Please try again.",
            )
            raise
        finally:
            self.is_submitting = False

        confirmation = BookingConfirmation(
            booking_id=booking_id,
            guest_name=validate_guest_name(guest_name),
            tier_name=quote.tier.name,
            distance_km=quote.distance_km,
            estimated_minutes=estimate_flight_minutes(
                quote.distance_km, self.cruise_speed_kmh
            ),
            total_price=quote.price,
        )
        self.notifier.notify(
            NotificationKind.SUCCESS,
            "Booking confirmed!",
            f"Your {confirmation.tier_name} pod is on its way",
        )
        controller.reset()
        return confirmation
