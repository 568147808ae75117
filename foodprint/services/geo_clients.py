"""
Geocoding and routing clients.

GeoapifyGeocoder turns an address into coordinates; OpenRouteServiceRouter
measures the road distance between two points. Both speak HTTP through
httpx and leave fallback policy to TravelDistanceResolver.
"""

import logging
from typing import Optional

import httpx

from ..core.config import settings
from ..schemas.emission_schemas import Coordinates

logger = logging.getLogger(__name__)


class GeoapifyGeocoder:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        country_code: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = settings.geoapify_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.geoapify_api_url).rstrip("/")
        self.country_code = settings.geocode_country_code if country_code is None else country_code
        self.timeout = settings.external_timeout_seconds if timeout is None else timeout
        self._transport = transport

    async def geocode(self, address: str) -> Optional[Coordinates]:
        """Return the first match for an address, or None when nothing matches."""
        if not address or not address.strip():
            logger.warning("Empty address provided for geocoding")
            return None
        if not self.api_key:
            logger.info("Geoapify API key not configured, cannot geocode '%s'", address)
            return None

        params = {"text": address, "apiKey": self.api_key}
        if self.country_code:
            params["filter"] = f"countrycode:{self.country_code}"

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(f"{self.base_url}/geocode/search", params=params)
            response.raise_for_status()
            features = response.json().get("features") or []

        if not features:
            logger.warning("No coordinates found for address: %s", address)
            return None

        lng, lat = features[0]["geometry"]["coordinates"][:2]
        return Coordinates(lat=lat, lng=lng)


class OpenRouteServiceRouter:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = settings.openrouteservice_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.openrouteservice_api_url).rstrip("/")
        self.timeout = settings.external_timeout_seconds if timeout is None else timeout
        self._transport = transport

    async def route(self, origin: Coordinates, destination: Coordinates, profile: str) -> float:
        """
        Road distance between two points.

        Returns:
            Distance in meters

        Raises:
            httpx.HTTPError, KeyError, IndexError, RuntimeError on any failure
        """
        if not self.api_key:
            raise RuntimeError("OpenRouteService API key is not configured.")

        body = {
            "coordinates": [
                [origin.lng, origin.lat],
                [destination.lng, destination.lat],
            ],
            "preference": "recommended",
        }
        headers = {
            "Authorization": self.api_key,
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(
                f"{self.base_url}/v2/directions/{profile}", json=body, headers=headers
            )
            response.raise_for_status()
            data = response.json()

        return float(data["routes"][0]["summary"]["distance"])
