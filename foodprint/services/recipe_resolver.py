"""
Recipe Resolver Service

Resolves a dish name to the grams of each ingredient in one serving.

Tiers, each tried only when the previous one has no answer:
1. The static recipe table
2. An external recipe lookup (e.g. Spoonacular), bounded by a timeout
3. A keyword heuristic that always produces a composition
"""

import asyncio
import logging
import math
from typing import Callable, List, Mapping, Optional, Protocol, Tuple

from ..core.config import settings
from ..data.emission_defaults import DEFAULT_TABLES, EmissionTables, IngredientQuantities
from .name_normalizer import NameNormalizer

logger = logging.getLogger(__name__)

SOURCE_TABLE = "table"
SOURCE_LOOKUP = "lookup"
SOURCE_ESTIMATE = "estimate"


class RecipeLookup(Protocol):
    async def lookup(self, dish_name: str) -> Optional[IngredientQuantities]:
        ...


def _rice_dish(name: str) -> IngredientQuantities:
    result = {"rice": 150, "onions": 30, "oil": 15, "spices": 8}
    if "chicken" in name or "murgh" in name:
        result["chicken"] = 100
    elif "mutton" in name or "lamb" in name:
        result["lamb"] = 100
    elif "veg" in name:
        result["vegetables"] = 100
    return result


def _fixed(composition: IngredientQuantities) -> Callable[[str], IngredientQuantities]:
    return lambda name: dict(composition)


# Evaluated top to bottom, first match wins; "chicken biryani" is a chicken dish.
DISH_FAMILY_RULES: List[Tuple[Tuple[str, ...], Callable[[str], IngredientQuantities]]] = [
    (("chicken", "murgh"), _fixed({"chicken": 150, "onions": 40, "tomatoes": 60, "oil": 15, "spices": 10})),
    (("paneer",), _fixed({"paneer": 100, "onions": 40, "tomatoes": 60, "oil": 10, "spices": 8})),
    (("dal", "lentil"), _fixed({"lentils": 100, "onions": 30, "tomatoes": 40, "oil": 10, "spices": 5})),
    (("rice", "biryani", "pulao"), _rice_dish),
    (("roti", "naan", "bread"), _fixed({"flour": 80, "oil": 5})),
]

VEGETABLE_CURRY: IngredientQuantities = {
    "vegetables": 150,
    "onions": 40,
    "tomatoes": 50,
    "oil": 10,
    "spices": 5,
}


def estimate_dish_ingredients(dish_name: str) -> IngredientQuantities:
    """
    Guess a dish's composition from keywords in its name.
    Used when neither the recipe table nor the lookup knows the dish.
    """
    name = dish_name.lower()
    for keywords, build in DISH_FAMILY_RULES:
        if any(keyword in name for keyword in keywords):
            return build(name)
    return dict(VEGETABLE_CURRY)


class RecipeResolver:
    """
    Resolves dishes to ingredient quantities through a degrade chain.

    Never raises and never returns an empty mapping.
    """

    def __init__(
        self,
        tables: EmissionTables = DEFAULT_TABLES,
        lookup: Optional[RecipeLookup] = None,
        normalizer: Optional[NameNormalizer] = None,
        timeout: Optional[float] = None
    ):
        self.tables = tables
        self.lookup = lookup
        self.normalizer = normalizer or NameNormalizer(tables)
        self.timeout = settings.external_timeout_seconds if timeout is None else timeout

    async def resolve(self, dish_name: str) -> IngredientQuantities:
        """Return ingredient grams per serving for a dish."""
        ingredients, _ = await self.resolve_with_source(dish_name)
        return ingredients

    async def resolve_with_source(self, dish_name: str) -> Tuple[IngredientQuantities, str]:
        """
        Resolve a dish and report which tier answered.

        Returns:
            Tuple of (ingredient grams, one of "table", "lookup", "estimate")
        """
        name = dish_name.strip().lower()

        recipe = self.tables.recipes.get(name)
        if recipe:
            logger.debug("Found recipe in table: %s", name)
            return dict(recipe), SOURCE_TABLE

        fetched = await self._lookup(name)
        if fetched:
            return fetched, SOURCE_LOOKUP

        logger.info("Estimating ingredients for '%s' from its name", name)
        return estimate_dish_ingredients(name), SOURCE_ESTIMATE

    async def _lookup(self, name: str) -> Optional[IngredientQuantities]:
        if self.lookup is None:
            return None

        try:
            fetched = await asyncio.wait_for(self.lookup.lookup(name), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Recipe lookup timed out for '%s' after %.1fs", name, self.timeout)
            return None
        except Exception as exc:
            logger.warning("Recipe lookup failed for '%s': %s", name, exc)
            return None

        if not fetched:
            return None
        if not isinstance(fetched, Mapping):
            logger.warning("Recipe lookup returned %s for '%s', ignoring", type(fetched).__name__, name)
            return None

        result: IngredientQuantities = {}
        for ingredient, grams in fetched.items():
            try:
                grams = float(grams)
            except (TypeError, ValueError):
                logger.debug("Skipping '%s' with unusable amount %r", ingredient, grams)
                continue
            if not math.isfinite(grams) or grams < 0 or not isinstance(ingredient, str):
                logger.debug("Skipping '%s' with unusable amount %r", ingredient, grams)
                continue
            canonical = self.normalizer.normalize(ingredient)
            result[canonical] = result.get(canonical, 0.0) + grams

        if not result:
            logger.warning("Recipe lookup for '%s' had no usable ingredients", name)
            return None
        logger.info("Resolved '%s' via recipe lookup (%d ingredients)", name, len(result))
        return result
