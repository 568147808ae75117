"""
Dish String Parser

Turns an order line such as "2 x butter chicken, 1 x naan" into
OrderLine values. Malformed clauses are skipped, never raised.
"""

import logging
import re
from typing import List, Optional

from ..schemas.emission_schemas import OrderLine

logger = logging.getLogger(__name__)

CLAUSE_PATTERN = re.compile(r"^(\d+)\s*x\s+(.+)$", re.IGNORECASE)


def parse_dish_string(dish_string: Optional[str]) -> List[OrderLine]:
    """
    Parse a comma-separated dish string.

    Args:
        dish_string: Clauses of the form "<count> x <dish name>"

    Returns:
        OrderLine per valid clause, in input order
    """
    if not dish_string:
        return []

    lines = []
    for clause in dish_string.split(","):
        clause = " ".join(clause.split())
        match = CLAUSE_PATTERN.match(clause)
        if not match:
            if clause:
                logger.debug("Skipping clause with invalid format: %r", clause)
            continue

        count = int(match.group(1))
        if count <= 0:
            logger.debug("Skipping clause with zero count: %r", clause)
            continue

        lines.append(OrderLine(count=count, dish_name=match.group(2).strip().lower()))

    return lines
