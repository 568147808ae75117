"""
Tests for the Foodprint API.

Run with:
    pytest tests/test_main.py -v
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from foodprint.main import app
from foodprint.schemas.emission_schemas import TravelDetails
from foodprint.services.emission_calculator import EmissionCalculator

client = TestClient(app)


@pytest.fixture(autouse=True)
def _offline_calculator():
    """Serve requests with a calculator that never calls the recipe API."""
    with patch("foodprint.api.v1.emission_endpoints.emission_calculator", EmissionCalculator()):
        yield


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the Foodprint API!"}


# ---------------------------------------------------------------------------
# POST /api/v1/emissions/calculate
# ---------------------------------------------------------------------------

def test_calculate_with_distance():
    response = client.post(
        "/api/v1/emissions/calculate",
        json={"dishes": "2 x butter chicken, 1 x naan", "travel": 7.5},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["food"] == "4.60"
    assert data["packaging"] == "1.25"
    assert data["travelDistance"] == "7.50"
    assert data["transportType"] == "motorcycle"
    assert data["details"]["dishCount"] == 3
    assert data["details"]["packagingType"] == "plastic"
    assert data["details"]["dishes"][0]["totalEmission"] == "4.30"


def test_calculate_with_travel_object():
    response = client.post(
        "/api/v1/emissions/calculate",
        json={
            "dishes": "1 x dal fry",
            "travel": {"distance": 2, "transportType": "bicycle"},
            "packagingType": " Paper ",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["travel"] == "0.02"
    assert data["transportType"] == "bicycle"
    assert data["packaging"] == "0.15"


def test_calculate_travel_object_inherits_request_transport_type():
    response = client.post(
        "/api/v1/emissions/calculate",
        json={"dishes": "1 x naan", "travel": {"distance": 10}, "transportType": "car"},
    )

    assert response.status_code == 200
    assert response.json()["travel"] == "1.80"
    assert response.json()["transportType"] == "car"


@patch("foodprint.api.v1.emission_endpoints.travel_resolver")
def test_calculate_resolves_route_when_no_distance(mock_resolver):
    mock_resolver.resolve = AsyncMock(return_value=TravelDetails(
        distance=12.0, transport_type="scooter", emission_factor=0.09
    ))

    response = client.post(
        "/api/v1/emissions/calculate",
        json={
            "dishes": "1 x samosa",
            "originAddress": "Connaught Place, New Delhi",
            "destination": {"lat": 28.5355, "lng": 77.3910},
            "transportType": "scooter",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["travelDistance"] == "12.00"
    assert data["travel"] == "1.08"
    mock_resolver.resolve.assert_awaited_once()


def test_calculate_unparseable_dishes_still_returns_result():
    response = client.post("/api/v1/emissions/calculate", json={"dishes": "lots of food"})

    assert response.status_code == 200
    data = response.json()
    assert data["food"] == "0.00"
    assert data["total"] == "0.00"
    assert data["details"]["dishes"] == []


@pytest.mark.parametrize("body", [
    {},
    {"travel": 3},
    {"dishes": "1 x naan", "travel": -4},
    {"dishes": "1 x naan", "destination": {"lat": 200, "lng": 0}},
])
def test_calculate_rejects_invalid_body(body):
    response = client.post("/api/v1/emissions/calculate", json=body)
    assert response.status_code == 422


# ---------------------------------------------------------------------------
# POST /api/v1/emissions/travel-distance
# ---------------------------------------------------------------------------

def test_travel_distance_missing_origin_falls_back():
    response = client.post(
        "/api/v1/emissions/travel-distance",
        json={"destination": {"lat": 28.5355, "lng": 77.3910}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["distance"] == 5.0
    assert data["transportType"] == "motorcycle"
    assert data["emissionFactor"] == 0.115


# ---------------------------------------------------------------------------
# GET /api/v1/emissions/factors
# ---------------------------------------------------------------------------

def test_factors_lists_profiles():
    response = client.get("/api/v1/emissions/factors")

    assert response.status_code == 200
    data = response.json()
    assert data["defaultTransport"] == "motorcycle"
    assert data["transport"]["motorcycle"] == 0.115
    assert data["packaging"]["plastic"]["large"] == 0.4
    assert data["defaultPackaging"] == {"type": "plastic", "size": "medium"}
