"""Packaging emission model: containers per dish plus a fixed per-order overhead."""

from typing import Optional

from ..data.emission_defaults import (
    ADDITIONAL_PACKAGING_EMISSION,
    DEFAULT_TABLES,
    LARGE_PACKAGING_SIZE,
    LARGE_PACKAGING_THRESHOLD,
    EmissionTables,
)


class PackagingEmissionModel:
    def __init__(
        self,
        tables: EmissionTables = DEFAULT_TABLES,
        additional_emission: float = ADDITIONAL_PACKAGING_EMISSION
    ):
        self.tables = tables
        self.additional_emission = additional_emission

    def resolve_type(self, packaging_type: Optional[str]) -> str:
        if packaging_type and packaging_type in self.tables.packaging:
            return packaging_type
        return self.tables.default_packaging_type

    def size_for(self, dish_count: int) -> str:
        """Orders with more than two dishes go in large containers."""
        if dish_count > LARGE_PACKAGING_THRESHOLD:
            return LARGE_PACKAGING_SIZE
        return self.tables.default_packaging_size

    def compute(
        self,
        dish_count: int,
        packaging_type: Optional[str] = None,
        packaging_size: Optional[str] = None
    ) -> float:
        """
        Packaging emission for an order in kg CO2e.

        Unknown types and sizes fall back to the defaults.
        """
        sizes = self.tables.packaging[self.resolve_type(packaging_type)]
        if packaging_size not in sizes:
            packaging_size = self.tables.default_packaging_size
        return sizes[packaging_size] * dish_count + self.additional_emission


packaging_model = PackagingEmissionModel()
