"""
Travel Distance Resolver Service

Resolves the delivery distance between a restaurant address and the
customer's coordinates, plus the per-km factor of the transport mode.

Every failure (missing input, no geocode, no route, timeout) resolves to
the same fallback distance so callers always get a usable number.
"""

import asyncio
import logging
import math
from typing import Optional, Protocol

from ..core.config import settings
from ..data.emission_defaults import (
    CYCLING_PROFILE,
    CYCLING_TRANSPORTS,
    DEFAULT_TABLES,
    DRIVING_PROFILE,
    FALLBACK_DISTANCE_KM,
    EmissionTables,
)
from ..schemas.emission_schemas import Coordinates, TravelDetails
from .geo_clients import GeoapifyGeocoder, OpenRouteServiceRouter

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, address: str) -> Optional[Coordinates]:
        ...


class Router(Protocol):
    async def route(self, origin: Coordinates, destination: Coordinates, profile: str) -> float:
        ...


def routing_profile(transport_type: str) -> str:
    """Routing profile used for a transport mode."""
    if transport_type in CYCLING_TRANSPORTS:
        return CYCLING_PROFILE
    return DRIVING_PROFILE


class TravelDistanceResolver:
    def __init__(
        self,
        geocoder: Optional[Geocoder] = None,
        router: Optional[Router] = None,
        tables: EmissionTables = DEFAULT_TABLES,
        timeout: Optional[float] = None,
        fallback_distance_km: float = FALLBACK_DISTANCE_KM
    ):
        self.geocoder = geocoder or GeoapifyGeocoder()
        self.router = router or OpenRouteServiceRouter()
        self.tables = tables
        self.timeout = settings.external_timeout_seconds if timeout is None else timeout
        self.fallback_distance_km = fallback_distance_km

    async def resolve(
        self,
        origin_address: Optional[str],
        destination: Optional[Coordinates],
        transport_type: Optional[str] = None
    ) -> TravelDetails:
        """
        Resolve distance and emission factor for a delivery.

        Args:
            origin_address: Restaurant address to geocode
            destination: Customer coordinates
            transport_type: Delivery mode, defaults to the default transport

        Returns:
            TravelDetails with distance in km, transport type and factor
        """
        transport_type = transport_type or self.tables.default_transport

        if not origin_address or not origin_address.strip() or destination is None:
            logger.warning("Missing origin address or destination coordinates")
            return self._fallback(transport_type)

        try:
            origin = await asyncio.wait_for(
                self.geocoder.geocode(origin_address), timeout=self.timeout
            )
        except Exception as exc:
            logger.warning("Geocoding failed for '%s': %r", origin_address, exc)
            origin = None

        if origin is None:
            logger.warning(
                "Falling back to %.1f km due to geocoding failure", self.fallback_distance_km
            )
            return self._fallback(transport_type)

        profile = routing_profile(transport_type)
        try:
            meters = await asyncio.wait_for(
                self.router.route(origin, destination, profile), timeout=self.timeout
            )
            meters = float(meters)
        except Exception as exc:
            logger.warning("Routing failed (%s): %r", profile, exc)
            return self._fallback(transport_type)

        if not math.isfinite(meters) or meters < 0:
            logger.warning("Routing returned unusable distance %r (%s)", meters, profile)
            return self._fallback(transport_type)

        km = meters / 1000.0
        logger.info("Route distance: %.2f km via %s", km, profile)
        return TravelDetails(
            distance=km,
            transport_type=transport_type,
            emission_factor=self.tables.transport_factor(transport_type),
        )

    def _fallback(self, transport_type: str) -> TravelDetails:
        return TravelDetails(
            distance=self.fallback_distance_km,
            transport_type=transport_type,
            emission_factor=self.tables.transport_factor(transport_type),
        )
