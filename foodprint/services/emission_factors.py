"""
Emission Factor Resolver Service

Resolves an ingredient name to kg CO2e per kg of food.
Exact table hits win; otherwise the name is classified into a coarse
category by keyword and priced with that category's factor.
"""

import logging
from typing import List, Optional, Tuple

from ..data.emission_defaults import DEFAULT_TABLES, EmissionTables
from .name_normalizer import NameNormalizer

logger = logging.getLogger(__name__)

# Evaluated top to bottom, first match wins. Order matters: "ghee" is both
# dairy and oil, "peanut butter" is both dairy and nuts.
CATEGORY_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("meat", ("meat", "beef", "lamb", "pork", "veal")),
    ("seafood", ("fish", "prawn", "shrimp", "salmon", "seafood")),
    ("dairy", ("milk", "cream", "cheese", "curd", "yogurt", "butter", "ghee")),
    ("grains", ("flour", "bread", "roti", "naan", "rice", "cereal", "grain", "pasta")),
    ("pulses", ("chickpeas", "lentils", "dal", "beans", "peas")),
    ("oil", ("oil", "fat", "ghee")),
    ("spices", ("spice", "masala", "powder", "sauce", "paste", "extract")),
    ("nuts", ("nut", "almond", "cashew", "seed")),
    ("beverages", ("drink", "juice", "tea", "coffee")),
    ("processed", ("processed", "frozen", "ready", "instant")),
]


class EmissionFactorResolver:
    """
    Looks up ingredient emission factors with a category fallback.

    Never fails: names that match no rule are priced as vegetables.
    """

    def __init__(
        self,
        tables: EmissionTables = DEFAULT_TABLES,
        normalizer: Optional[NameNormalizer] = None,
        rules: Optional[List[Tuple[str, Tuple[str, ...]]]] = None
    ):
        self.tables = tables
        self.normalizer = normalizer or NameNormalizer(tables)
        self.rules = rules if rules is not None else CATEGORY_RULES

    def resolve(self, ingredient: str) -> float:
        """
        Get the emission factor for an ingredient.

        Args:
            ingredient: Ingredient name, canonical or not

        Returns:
            kg CO2e per kg of the ingredient
        """
        canonical = self.normalizer.normalize(ingredient)
        factor = self.tables.food.get(canonical)
        if factor is not None:
            return factor

        category = self.classify(ingredient) or self.tables.default_category
        logger.debug("No factor for '%s', using category '%s'", ingredient, category)
        return self.tables.categories[category]

    def classify(self, ingredient: str) -> Optional[str]:
        """Return the first category whose keywords appear in the name."""
        lowered = ingredient.lower()
        for category, keywords in self.rules:
            if any(keyword in lowered for keyword in keywords):
                return category
        return None

    def compute_emission(self, ingredients: dict) -> float:
        """Total kg CO2e of an ingredient -> grams mapping."""
        return sum(
            grams / 1000.0 * self.resolve(name)
            for name, grams in ingredients.items()
        )


emission_factor_resolver = EmissionFactorResolver()
