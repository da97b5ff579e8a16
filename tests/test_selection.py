"""Unit tests for the location selection state machine."""

from unittest.mock import Mock

import pytest

from flycab.domain.distance import haversine_km
from flycab.domain.entities import GeoPoint, UnknownTierError, ValidationError
from flycab.domain.enums import SelectionPhase
from flycab.domain.selection import (
    Both,
    Empty,
    PickupOnly,
    SelectionController,
    reduce,
)
from tests.conftest import CITY_CENTRE, HEBBAL

ELSEWHERE = GeoPoint(12.9352, 77.6245)


class TestReducer:
    def test_empty_to_pickup_only(self):
        assert reduce(Empty(), CITY_CENTRE) == PickupOnly(pickup=CITY_CENTRE)

    def test_pickup_only_to_both_computes_distance(self):
        state = reduce(PickupOnly(pickup=CITY_CENTRE), HEBBAL)
        assert isinstance(state, Both)
        assert state.pickup == CITY_CENTRE
        assert state.dropoff == HEBBAL
        assert state.distance_km == haversine_km(CITY_CENTRE, HEBBAL)

    def test_both_resets_and_discards_point(self):
        both = Both(pickup=CITY_CENTRE, dropoff=HEBBAL, distance_km=12.4)
        assert reduce(both, ELSEWHERE) == Empty()


class TestSelectionController:
    def test_starts_empty(self):
        controller = SelectionController()
        assert controller.phase is SelectionPhase.EMPTY
        assert controller.distance_km is None
        assert controller.quote is None
        assert controller.quotes() == []

    def test_full_cycle(self):
        controller = SelectionController()

        controller.pick(CITY_CENTRE)
        assert controller.phase is SelectionPhase.PICKUP_ONLY
        assert controller.pickup == CITY_CENTRE
        assert controller.distance_km is None

        controller.pick(HEBBAL)
        assert controller.phase is SelectionPhase.BOTH
        assert controller.distance_km is not None
        controller.select_tier("skyplus")

        controller.pick(ELSEWHERE)
        assert controller.phase is SelectionPhase.EMPTY
        assert controller.pickup is None
        assert controller.dropoff is None
        assert controller.distance_km is None
        assert controller.selected_tier is None

    def test_callback_invoked_after_every_pick(self):
        callback = Mock()
        controller = SelectionController(on_location_select=callback)

        controller.pick(CITY_CENTRE)
        controller.pick(HEBBAL)
        controller.pick(ELSEWHERE)

        assert [c.args for c in callback.call_args_list] == [
            (CITY_CENTRE, None),
            (CITY_CENTRE, HEBBAL),
            (None, None),
        ]

    def test_quotes_only_in_both(self):
        controller = SelectionController()
        controller.pick(CITY_CENTRE)
        assert controller.quotes() == []
        controller.pick(HEBBAL)
        assert [q.tier.id for q in controller.quotes()] == [
            "ecofly",
            "skyplus",
            "royalair",
        ]

    def test_select_tier_requires_both_points(self):
        controller = SelectionController()
        with pytest.raises(ValidationError):
            controller.select_tier("ecofly")
        controller.pick(CITY_CENTRE)
        with pytest.raises(ValidationError):
            controller.select_tier("ecofly")
        assert controller.selected_tier is None

    def test_select_tier_does_not_change_state(self):
        controller = SelectionController()
        controller.pick(CITY_CENTRE)
        state = controller.pick(HEBBAL)

        quote = controller.select_tier("ecofly")

        assert controller.state is state
        assert quote.price == 50 + 15 * controller.distance_km
        assert controller.quote == quote

    def test_reselecting_tier_returns_new_quote(self):
        controller = SelectionController()
        controller.pick(CITY_CENTRE)
        controller.pick(HEBBAL)
        controller.select_tier("ecofly")

        quote = controller.select_tier("skyplus")

        assert quote.tier.id == "skyplus"
        assert quote.distance_km == controller.distance_km
        assert quote.price == 100 + 25 * controller.distance_km
        assert controller.quote == quote

    def test_select_unknown_tier(self):
        controller = SelectionController()
        controller.pick(CITY_CENTRE)
        controller.pick(HEBBAL)
        with pytest.raises(UnknownTierError):
            controller.select_tier("jetpack")

    def test_reset_clears_everything(self):
        callback = Mock()
        controller = SelectionController(on_location_select=callback)
        controller.pick(CITY_CENTRE)
        controller.pick(HEBBAL)
        controller.select_tier("royalair")

        controller.reset()

        assert controller.phase is SelectionPhase.EMPTY
        assert controller.selected_tier is None
        callback.assert_called_with(None, None)


class TestSerialisation:
    def test_round_trip_with_tier(self):
        controller = SelectionController()
        controller.pick(GeoPoint(12.9716, 77.5946, "MG Road"))
        controller.pick(HEBBAL)
        controller.select_tier("skyplus")

        restored = SelectionController.from_dict(controller.to_dict())

        assert restored.state == controller.state
        assert restored.selected_tier == controller.selected_tier
        assert restored.quote == controller.quote

    def test_pickup_only(self):
        controller = SelectionController()
        controller.pick(CITY_CENTRE)

        data = controller.to_dict()
        assert data["phase"] == "PICKUP_ONLY"
        assert data["dropoff"] is None

        restored = SelectionController.from_dict(data)
        assert restored.state == PickupOnly(pickup=CITY_CENTRE)
