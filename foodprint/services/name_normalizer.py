"""
Name Normalizer Service

Maps ingredient name variants ("capsicum", "curd", "atta") onto the
standard names used by the emission factor table.
"""

from ..data.emission_defaults import DEFAULT_TABLES, EmissionTables


class NameNormalizer:
    """Case-insensitive alias lookup against the normalization table."""

    def __init__(self, tables: EmissionTables = DEFAULT_TABLES):
        self.tables = tables

    def normalize(self, name: str) -> str:
        """
        Return the canonical name for an ingredient.

        Unknown names come back lower-cased and stripped.
        """
        lowered = name.strip().lower()
        return self.tables.aliases.get(lowered, lowered)


name_normalizer = NameNormalizer()
