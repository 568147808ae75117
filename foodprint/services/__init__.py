"""
Services module for order emission estimation.
Contains the parser, resolvers, packaging model and the aggregating calculator.
"""

from .emission_calculator import EmissionCalculator
from .emission_factors import EmissionFactorResolver
from .name_normalizer import NameNormalizer
from .packaging import PackagingEmissionModel
from .recipe_resolver import RecipeResolver
from .travel_resolver import TravelDistanceResolver

__all__ = [
    "EmissionCalculator",
    "EmissionFactorResolver",
    "NameNormalizer",
    "PackagingEmissionModel",
    "RecipeResolver",
    "TravelDistanceResolver"
]
