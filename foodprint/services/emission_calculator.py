"""
Emission Calculator Service

Estimates the footprint of a delivery order: food (from resolved recipes),
packaging and travel, with a per-ingredient attribution of the food share.
"""

import asyncio
import logging
import math
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple, Union

from ..data.emission_defaults import DEFAULT_TABLES, EmissionTables, IngredientQuantities
from ..schemas.emission_schemas import (
    DishBreakdown,
    EmissionDetails,
    EmissionResult,
    IngredientBreakdown,
    OrderLine,
    TravelDetails,
)
from .dish_parser import parse_dish_string
from .emission_factors import EmissionFactorResolver
from .packaging import PackagingEmissionModel
from .recipe_lookup import SpoonacularRecipeLookup
from .recipe_resolver import RecipeResolver

logger = logging.getLogger(__name__)

TravelInput = Union[None, float, int, TravelDetails, Dict[str, Any]]


def _fmt(value: float, places: int = 2) -> str:
    return f"{value:.{places}f}"


def distribute_percentages(emissions: Dict[str, float], total: float) -> Dict[str, float]:
    """
    Split 100% across ingredients at 0.1 resolution.

    Largest-remainder rounding, so the rounded shares always add up to 100.0.
    All shares are 0.0 when the total is not positive.
    """
    if total <= 0:
        return {name: 0.0 for name in emissions}

    raw = {name: emission / total * 1000.0 for name, emission in emissions.items()}
    floors = {name: math.floor(value) for name, value in raw.items()}
    remaining = 1000 - sum(floors.values())
    by_remainder = sorted(raw, key=lambda name: raw[name] - floors[name], reverse=True)
    for name in by_remainder[:max(remaining, 0)]:
        floors[name] += 1
    return {name: tenths / 10.0 for name, tenths in floors.items()}


class EmissionCalculator:
    """
    Aggregates food, packaging and travel emission for an order.

    Stateless: every call keeps its accumulators local, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        tables: EmissionTables = DEFAULT_TABLES,
        recipe_resolver: Optional[RecipeResolver] = None,
        factor_resolver: Optional[EmissionFactorResolver] = None,
        packaging_model: Optional[PackagingEmissionModel] = None
    ):
        self.tables = tables
        self.recipe_resolver = recipe_resolver or RecipeResolver(tables)
        self.factor_resolver = factor_resolver or EmissionFactorResolver(tables)
        self.packaging_model = packaging_model or PackagingEmissionModel(tables)

    async def calculate(
        self,
        dish_string: Optional[str],
        travel_details: TravelInput = None,
        packaging_type: Optional[str] = "plastic"
    ) -> EmissionResult:
        """
        Calculate the emission breakdown of an order.

        Args:
            dish_string: Dishes in the form "2 x butter chicken, 1 x naan"
            travel_details: Distance in km, or TravelDetails / its dict form
            packaging_type: Packaging material (plastic, paper, ...)

        Returns:
            EmissionResult with values formatted to 2 decimals
        """
        lines = parse_dish_string(dish_string)
        priced = await asyncio.gather(*(self._price_line(line) for line in lines))

        total_food = 0.0
        dish_count = 0
        all_ingredients: IngredientQuantities = {}
        dishes: List[DishBreakdown] = []

        for line, ingredients, emission in priced:
            dish_count += line.count
            total_food += emission * line.count
            for ingredient, grams in ingredients.items():
                all_ingredients[ingredient] = all_ingredients.get(ingredient, 0.0) + grams * line.count
            dishes.append(DishBreakdown(
                name=line.dish_name,
                count=line.count,
                emission=_fmt(emission),
                total_emission=_fmt(emission * line.count),
                ingredients=ingredients,
            ))

        resolved_packaging = self.packaging_model.resolve_type(packaging_type)
        if dish_count > 0:
            packaging = self.packaging_model.compute(
                dish_count, resolved_packaging, self.packaging_model.size_for(dish_count)
            )
        else:
            packaging = 0.0

        travel, travel_distance, transport_type = self.compute_travel(travel_details)

        food_str, packaging_str, travel_str = _fmt(total_food), _fmt(packaging), _fmt(travel)
        total = float(food_str) + float(packaging_str) + float(travel_str)

        logger.debug(
            "Order emission: food=%.4f packaging=%.4f travel=%.4f (%d dishes)",
            total_food, packaging, travel, dish_count
        )

        return EmissionResult(
            food=food_str,
            packaging=packaging_str,
            travel=travel_str,
            travel_distance=_fmt(travel_distance),
            transport_type=transport_type,
            total=_fmt(total),
            details=EmissionDetails(
                dishes=dishes,
                ingredients=self.attribute_ingredients(all_ingredients),
                dish_count=dish_count,
                packaging_type=resolved_packaging,
            ),
        )

    async def _price_line(self, line: OrderLine) -> Tuple[OrderLine, IngredientQuantities, float]:
        ingredients = await self.recipe_resolver.resolve(line.dish_name)
        emission = self.factor_resolver.compute_emission(ingredients)
        logger.debug("Emission for %s: %.4f kg CO2e per serving", line.dish_name, emission)
        return line, ingredients, emission

    def compute_travel(self, travel_details: TravelInput) -> Tuple[float, float, str]:
        """
        Travel emission for either input shape.

        Returns:
            Tuple of (emission kg CO2e, distance km, transport type)
        """
        default_transport = self.tables.default_transport

        if isinstance(travel_details, dict):
            try:
                travel_details = TravelDetails.model_validate(travel_details)
            except ValueError as exc:
                logger.warning("Ignoring invalid travel details %r: %s", travel_details, exc)
                return 0.0, 0.0, default_transport

        if isinstance(travel_details, TravelDetails):
            transport_type = travel_details.transport_type or default_transport
            factor = travel_details.emission_factor
            if factor is None:
                factor = self.tables.transport_factor(transport_type)
            return travel_details.distance * factor, travel_details.distance, transport_type

        if isinstance(travel_details, Real) and not isinstance(travel_details, bool):
            distance = max(float(travel_details), 0.0)
            return distance * self.tables.default_transport_factor, distance, default_transport

        if travel_details is not None:
            logger.warning("Ignoring unsupported travel details: %r", travel_details)
        return 0.0, 0.0, default_transport

    def attribute_ingredients(self, all_ingredients: IngredientQuantities) -> Dict[str, IngredientBreakdown]:
        """Emission and share of the food total for each aggregated ingredient."""
        emissions = {
            name: grams / 1000.0 * self.factor_resolver.resolve(name)
            for name, grams in all_ingredients.items()
        }
        percentages = distribute_percentages(emissions, sum(emissions.values()))
        return {
            name: IngredientBreakdown(
                amount=_fmt(all_ingredients[name], 1),
                emission=_fmt(emission),
                percentage=_fmt(percentages[name], 1),
            )
            for name, emission in emissions.items()
        }


# Singleton instance for easy import
emission_calculator = EmissionCalculator(
    recipe_resolver=RecipeResolver(lookup=SpoonacularRecipeLookup())
)
