"""
Location selection state machine.

States form a tagged union and change only through ``reduce``:

    Empty --pick(p)--> PickupOnly(p) --pick(d)--> Both(p, d) --pick--> Empty

There is no single-point undo: changing the pickup takes a full cycle.
The selected tier lives beside the state, is only settable in ``Both`` and
is cleared every time the state returns to ``Empty``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .distance import haversine_km
from .entities import GeoPoint, Quote, Tier, ValidationError
from .enums import SelectionPhase
from .pricing import get_tier, quote_price, quotes_for

logger = logging.getLogger(__name__)

LocationCallback = Callable[[Optional[GeoPoint], Optional[GeoPoint]], None]


@dataclass(frozen=True)
class Empty:
    phase = SelectionPhase.EMPTY


@dataclass(frozen=True)
class PickupOnly:
    pickup: GeoPoint
    phase = SelectionPhase.PICKUP_ONLY


@dataclass(frozen=True)
class Both:
    pickup: GeoPoint
    dropoff: GeoPoint
    distance_km: float
    phase = SelectionPhase.BOTH


SelectionState = Union[Empty, PickupOnly, Both]


def reduce(state: SelectionState, point: GeoPoint) -> SelectionState:
    """Apply one pick event.  The point is discarded when resetting."""
    if isinstance(state, Empty):
        return PickupOnly(pickup=point)
    if isinstance(state, PickupOnly):
        return Both(
            pickup=state.pickup,
            dropoff=point,
            distance_km=haversine_km(state.pickup, point),
        )
    return Empty()


class SelectionController:
    """Holds one client's selection and the tier chosen for it."""

    def __init__(
        self,
        on_location_select: Optional[LocationCallback] = None,
        state: Optional[SelectionState] = None,
        selected_tier: Optional[Tier] = None,
    ):
        self.on_location_select = on_location_select
        self.state: SelectionState = state if state is not None else Empty()
        self.selected_tier = selected_tier

    # ── Read side ─────────────────────────────────────────────────

    @property
    def phase(self) -> SelectionPhase:
        return self.state.phase

    @property
    def pickup(self) -> Optional[GeoPoint]:
        return getattr(self.state, "pickup", None)

    @property
    def dropoff(self) -> Optional[GeoPoint]:
        return getattr(self.state, "dropoff", None)

    @property
    def distance_km(self) -> Optional[float]:
        return getattr(self.state, "distance_km", None)

    @property
    def quote(self) -> Optional[Quote]:
        """Quote for the selected tier; only exists in ``Both``."""
        if not isinstance(self.state, Both) or self.selected_tier is None:
            return None
        distance = self.state.distance_km
        return Quote(
            tier=self.selected_tier,
            distance_km=distance,
            price=quote_price(self.selected_tier, distance),
        )

    def quotes(self) -> list[Quote]:
        if not isinstance(self.state, Both):
            return []
        return quotes_for(self.state.distance_km)

    # ── Events ────────────────────────────────────────────────────

    def pick(self, point: GeoPoint) -> SelectionState:
        previous = self.phase
        self.state = reduce(self.state, point)
        if isinstance(self.state, Empty):
            self.selected_tier = None
        logger.debug("Selection %s -> %s", previous.value, self.phase.value)
        self._emit()
        return self.state

    def select_tier(self, tier_id: str) -> Quote:
        if not isinstance(self.state, Both):
            raise ValidationError(
                "Select both pickup and dropoff before choosing a tier"
            )
        tier = get_tier(tier_id)
        self.selected_tier = tier
        distance = self.state.distance_km
        return Quote(
            tier=tier, distance_km=distance, price=quote_price(tier, distance)
        )

    def reset(self) -> None:
        self.state = Empty()
        self.selected_tier = None
        self._emit()

    def _emit(self) -> None:
        if self.on_location_select is not None:
            self.on_location_select(self.pickup, self.dropoff)

    # ── Serialisation ─────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "pickup": self.pickup.to_dict() if self.pickup else None,
            "dropoff": self.dropoff.to_dict() if self.dropoff else None,
            "selected_tier_id": self.selected_tier.id if self.selected_tier else None,
        }

    @classmethod
    def from_dict(
        cls, data: dict, on_location_select: Optional[LocationCallback] = None
    ) -> SelectionController:
        phase = SelectionPhase(data["phase"])
        state: SelectionState
        if phase is SelectionPhase.EMPTY:
            state = Empty()
        elif phase is SelectionPhase.PICKUP_ONLY:
            state = PickupOnly(pickup=GeoPoint.from_dict(data["pickup"]))
        else:
            pickup = GeoPoint.from_dict(data["pickup"])
            dropoff = GeoPoint.from_dict(data["dropoff"])
            state = Both(
                pickup=pickup,
                dropoff=dropoff,
                distance_km=haversine_km(pickup, dropoff),
            )

        tier_id = data.get("selected_tier_id")
        selected_tier = (
            get_tier(tier_id) if tier_id and isinstance(state, Both) else None
        )
        return cls(
            on_location_select=on_location_select,
            state=state,
            selected_tier=selected_tier,
        )
