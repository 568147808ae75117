"""
Order Emission API Endpoints

Provides endpoints for:
- Estimating the footprint of a delivery order
- Resolving a delivery distance
- Listing the transport and packaging profiles
"""

import logging

from fastapi import APIRouter

from ...data.emission_defaults import (
    ADDITIONAL_PACKAGING_EMISSION,
    DEFAULT_PACKAGING_SIZE,
    DEFAULT_PACKAGING_TYPE,
    DEFAULT_TRANSPORT,
    get_packaging_profiles,
    get_transport_profiles,
)
from ...schemas.emission_schemas import (
    EmissionCalculationRequest,
    EmissionResult,
    TravelDetails,
    TravelDistanceRequest,
)
from ...services.emission_calculator import emission_calculator
from ...services.travel_resolver import TravelDistanceResolver

router = APIRouter(prefix="/emissions", tags=["Order Emissions"])
logger = logging.getLogger(__name__)

travel_resolver = TravelDistanceResolver()


@router.post(
    "/calculate",
    response_model=EmissionResult,
    summary="Estimate the footprint of an order",
    description="""
    Estimate food, packaging and travel emissions for a delivery order.

    This endpoint:
    1. Parses the dish string ("2 x butter chicken, 1 x naan")
    2. Resolves each dish's ingredients (recipe table, recipe API, or estimate)
    3. Prices ingredients with emission factors
    4. Adds packaging for the dish count
    5. Adds travel, resolving the route when no distance is given

    Unknown dishes, ingredients and routes degrade to estimates instead of failing.
    """
)
async def calculate_emission(request: EmissionCalculationRequest):
    """Calculate the emission breakdown of an order."""
    travel = request.travel
    if travel is None and (request.origin_address or request.destination):
        travel = await travel_resolver.resolve(
            request.origin_address, request.destination, request.transport_type
        )
    elif isinstance(travel, TravelDetails) and travel.transport_type is None and request.transport_type:
        travel = travel.model_copy(update={"transport_type": request.transport_type})

    return await emission_calculator.calculate(request.dishes, travel, request.packaging_type)


@router.post(
    "/travel-distance",
    response_model=TravelDetails,
    summary="Resolve delivery distance",
    description="Geocode the origin and route to the destination. Falls back to 5 km on any failure."
)
async def resolve_travel_distance(request: TravelDistanceRequest):
    """Resolve distance and emission factor for a delivery."""
    return await travel_resolver.resolve(
        request.origin_address, request.destination, request.transport_type
    )


@router.get(
    "/factors",
    summary="Get transport and packaging profiles"
)
async def get_emission_factors():
    """Return the transport and packaging emission profiles with their defaults."""
    return {
        "transport": dict(get_transport_profiles()),
        "defaultTransport": DEFAULT_TRANSPORT,
        "packaging": {
            material: dict(sizes) for material, sizes in get_packaging_profiles().items()
        },
        "defaultPackaging": {"type": DEFAULT_PACKAGING_TYPE, "size": DEFAULT_PACKAGING_SIZE},
        "additionalPackagingEmission": ADDITIONAL_PACKAGING_EMISSION,
    }
