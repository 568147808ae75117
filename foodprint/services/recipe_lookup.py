"""
Recipe Lookup Client

Fetches a dish's ingredient composition from the Spoonacular API.
Returns None when the service has no recipe or no API key is configured;
HTTP errors are raised to the caller, which owns the fallback.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import settings
from ..data.emission_defaults import UNIT_TO_GRAMS, IngredientQuantities

logger = logging.getLogger(__name__)


class SpoonacularRecipeLookup:
    """Two-step lookup: complexSearch for the best match, then its ingredient widget."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = settings.spoonacular_api_key if api_key is None else api_key
        self.base_url = (base_url or settings.spoonacular_api_url).rstrip("/")
        self.timeout = settings.external_timeout_seconds if timeout is None else timeout
        self._transport = transport

    async def lookup(self, dish_name: str) -> Optional[IngredientQuantities]:
        """
        Look up ingredient grams for a dish.

        Args:
            dish_name: Dish to search for

        Returns:
            Ingredient name -> grams, or None if no recipe was found
        """
        if not self.api_key:
            logger.info("Spoonacular API key not configured, skipping lookup for '%s'", dish_name)
            return None

        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self._transport
        ) as client:
            search = await client.get(
                "/recipes/complexSearch",
                params={
                    "query": dish_name,
                    "number": 1,
                    "addRecipeInformation": "true",
                    "apiKey": self.api_key,
                },
            )
            search.raise_for_status()
            results = search.json().get("results") or []
            if not results:
                logger.info("No recipe found for '%s'", dish_name)
                return None

            recipe_id = results[0]["id"]
            widget = await client.get(
                f"/recipes/{recipe_id}/ingredientWidget.json",
                params={"apiKey": self.api_key},
            )
            widget.raise_for_status()
            return self._to_grams(widget.json().get("ingredients") or [])

    @staticmethod
    def _to_grams(items: List[Dict[str, Any]]) -> IngredientQuantities:
        """Convert widget entries to grams; unknown units are read as grams."""
        result: IngredientQuantities = {}
        for item in items:
            name = (item.get("name") or "").strip().lower()
            metric = (item.get("amount") or {}).get("metric") or {}
            value = metric.get("value")
            if not name or value is None:
                continue
            unit = (metric.get("unit") or "g").strip().lower()
            grams = float(value) * UNIT_TO_GRAMS.get(unit, 1.0)
            result[name] = result.get(name, 0.0) + max(grams, 0.0)
        return result
