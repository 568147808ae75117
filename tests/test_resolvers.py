"""
Tests for recipe and travel resolution, including their fallback chains.

Run with:
    pytest tests/test_resolvers.py -v
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from foodprint.data.emission_defaults import DEFAULT_TABLES
from foodprint.schemas.emission_schemas import Coordinates
from foodprint.services.recipe_resolver import (
    RecipeResolver,
    VEGETABLE_CURRY,
    estimate_dish_ingredients,
)
from foodprint.services.travel_resolver import TravelDistanceResolver

DESTINATION = Coordinates(lat=28.5355, lng=77.3910)
ORIGIN = Coordinates(lat=28.6315, lng=77.2167)


def _lookup(return_value=None, side_effect=None):
    lookup = MagicMock()
    lookup.lookup = AsyncMock(return_value=return_value, side_effect=side_effect)
    return lookup


def _travel_resolver(geocode=None, geocode_error=None, meters=None, route_error=None, timeout=None):
    geocoder = MagicMock()
    geocoder.geocode = AsyncMock(return_value=geocode, side_effect=geocode_error)
    router = MagicMock()
    router.route = AsyncMock(return_value=meters, side_effect=route_error)
    return TravelDistanceResolver(geocoder=geocoder, router=router, timeout=timeout), geocoder, router


# ---------------------------------------------------------------------------
# Recipe resolver
# ---------------------------------------------------------------------------

def test_known_dish_uses_table_without_lookup():
    lookup = _lookup(return_value={"chicken": 500})
    resolver = RecipeResolver(lookup=lookup)

    ingredients, source = asyncio.run(resolver.resolve_with_source("Dal Fry"))

    assert source == "table"
    assert ingredients == dict(DEFAULT_TABLES.recipes["dal fry"])
    lookup.lookup.assert_not_called()


def test_table_result_is_a_copy():
    resolver = RecipeResolver()
    ingredients = asyncio.run(resolver.resolve("naan"))
    ingredients["flour"] = 0
    assert asyncio.run(resolver.resolve("naan"))["flour"] == 80


def test_lookup_result_is_normalized():
    lookup = _lookup(return_value={"Capsicum": 40, "curd": 30, "yoghurt": 10})
    resolver = RecipeResolver(lookup=lookup)

    ingredients, source = asyncio.run(resolver.resolve_with_source("stuffed peppers"))

    assert source == "lookup"
    assert ingredients == {"bell pepper": 40.0, "yogurt": 40.0}
    lookup.lookup.assert_awaited_once_with("stuffed peppers")


@pytest.mark.parametrize("lookup", [
    None,
    _lookup(return_value=None),
    _lookup(return_value={}),
    _lookup(side_effect=httpx.ConnectError("connection refused")),
    _lookup(side_effect=ValueError("bad payload")),
])
def test_unknown_dish_falls_through_to_estimate(lookup):
    resolver = RecipeResolver(lookup=lookup)

    ingredients, source = asyncio.run(resolver.resolve_with_source("mystery thali"))

    assert source == "estimate"
    assert ingredients == VEGETABLE_CURRY


@pytest.mark.parametrize("payload", [
    {"paneer": None},
    {"paneer": "a pinch"},
    {"rice": -500},
    {"rice": float("nan")},
    ["paneer"],
])
def test_unusable_lookup_payload_falls_through_to_estimate(payload):
    resolver = RecipeResolver(lookup=_lookup(return_value=payload))

    ingredients, source = asyncio.run(resolver.resolve_with_source("mystery thali"))

    assert source == "estimate"
    assert ingredients == VEGETABLE_CURRY


def test_lookup_payload_keeps_only_usable_amounts():
    lookup = _lookup(return_value={"paneer": 100, "rice": -500, "salt": None, "curd": "40"})
    resolver = RecipeResolver(lookup=lookup)

    ingredients, source = asyncio.run(resolver.resolve_with_source("paneer bowl"))

    assert source == "lookup"
    assert ingredients == {"paneer": 100.0, "yogurt": 40.0}


def test_explicit_zero_timeout_is_kept():
    assert RecipeResolver(timeout=0).timeout == 0
    resolver, _, _ = _travel_resolver(timeout=0)
    assert resolver.timeout == 0


def test_slow_lookup_times_out_to_estimate():
    class SlowLookup:
        async def lookup(self, dish_name):
            await asyncio.sleep(5)
            return {"beef": 1000}

    resolver = RecipeResolver(lookup=SlowLookup(), timeout=0.01)
    ingredients, source = asyncio.run(resolver.resolve_with_source("murgh makhani"))

    assert source == "estimate"
    assert "chicken" in ingredients


@pytest.mark.parametrize("dish,expected_key", [
    ("murgh tikka", "chicken"),
    ("paneer tikka", "paneer"),
    ("dal makhani", "lentils"),
    ("jeera rice", "rice"),
    ("garlic naan", "flour"),
])
def test_estimate_dish_families(dish, expected_key):
    assert expected_key in estimate_dish_ingredients(dish)


def test_estimate_rule_order_chicken_before_rice():
    ingredients = estimate_dish_ingredients("chicken biryani")
    assert "chicken" in ingredients
    assert "rice" not in ingredients


def test_estimate_rice_dish_adds_protein():
    assert estimate_dish_ingredients("mutton biryani")["lamb"] == 100
    assert estimate_dish_ingredients("veg pulao")["vegetables"] == 100
    assert set(estimate_dish_ingredients("plain rice")) == {"rice", "onions", "oil", "spices"}


def test_estimate_is_never_empty():
    assert estimate_dish_ingredients("") == VEGETABLE_CURRY


# ---------------------------------------------------------------------------
# Travel distance resolver
# ---------------------------------------------------------------------------

def test_travel_resolves_route_distance():
    resolver, geocoder, router = _travel_resolver(geocode=ORIGIN, meters=7500)

    travel = asyncio.run(resolver.resolve("Connaught Place, New Delhi", DESTINATION, "car"))

    assert travel.distance == pytest.approx(7.5)
    assert travel.transport_type == "car"
    assert travel.emission_factor == DEFAULT_TABLES.travel["car"]
    router.route.assert_awaited_once_with(ORIGIN, DESTINATION, "driving-car")


def test_travel_uses_cycling_profile_for_bicycles():
    resolver, _, router = _travel_resolver(geocode=ORIGIN, meters=3000)
    asyncio.run(resolver.resolve("Khan Market", DESTINATION, "e-bicycle"))
    router.route.assert_awaited_once_with(ORIGIN, DESTINATION, "cycling-regular")


@pytest.mark.parametrize("origin,destination", [
    (None, DESTINATION),
    ("", DESTINATION),
    ("Connaught Place", None),
])
def test_travel_missing_input_falls_back(origin, destination):
    resolver, geocoder, _ = _travel_resolver(geocode=ORIGIN, meters=7500)

    travel = asyncio.run(resolver.resolve(origin, destination))

    assert f"{travel.distance:.2f}" == "5.00"
    assert travel.transport_type == "motorcycle"
    assert travel.emission_factor == DEFAULT_TABLES.travel["motorcycle"]
    geocoder.geocode.assert_not_called()


@pytest.mark.parametrize("geocode,geocode_error", [
    (None, None),
    (None, httpx.ReadTimeout("timed out")),
])
def test_travel_geocode_failure_falls_back(geocode, geocode_error):
    resolver, _, router = _travel_resolver(geocode=geocode, geocode_error=geocode_error, meters=7500)

    travel = asyncio.run(resolver.resolve("Nowhere", DESTINATION, "scooter"))

    assert travel.distance == 5.0
    assert travel.emission_factor == DEFAULT_TABLES.travel["scooter"]
    router.route.assert_not_called()


def test_travel_routing_failure_falls_back():
    resolver, _, _ = _travel_resolver(geocode=ORIGIN, route_error=KeyError("routes"))

    travel = asyncio.run(resolver.resolve("Connaught Place", DESTINATION))

    assert f"{travel.distance:.2f}" == "5.00"
    assert travel.transport_type == "motorcycle"


@pytest.mark.parametrize("meters", [None, float("nan"), float("inf"), "far", -1200])
def test_travel_unusable_route_distance_falls_back(meters):
    resolver, _, router = _travel_resolver(geocode=ORIGIN, meters=meters)

    travel = asyncio.run(resolver.resolve("Connaught Place", DESTINATION))

    assert travel.distance == 5.0
    assert travel.emission_factor == DEFAULT_TABLES.travel["motorcycle"]
    router.route.assert_awaited_once()


def test_travel_slow_router_times_out_to_fallback():
    class SlowRouter:
        async def route(self, origin, destination, profile):
            await asyncio.sleep(5)
            return 12000

    geocoder = MagicMock()
    geocoder.geocode = AsyncMock(return_value=ORIGIN)
    resolver = TravelDistanceResolver(geocoder=geocoder, router=SlowRouter(), timeout=0.01)

    travel = asyncio.run(resolver.resolve("Connaught Place", DESTINATION))
    assert travel.distance == 5.0


def test_travel_unknown_transport_uses_default_factor():
    resolver, _, _ = _travel_resolver(geocode=ORIGIN, meters=2000)

    travel = asyncio.run(resolver.resolve("Connaught Place", DESTINATION, "hovercraft"))

    assert travel.transport_type == "hovercraft"
    assert travel.emission_factor == DEFAULT_TABLES.travel["motorcycle"]
    assert travel.distance == pytest.approx(2.0)
