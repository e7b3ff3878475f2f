#!/usr/bin/env python3
"""
Deduplication and totals for parsed inventory items.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .models import ParsedInventoryItem
from .patterns import GRAND_TOTAL_PATTERN

logger = logging.getLogger(__name__)


def deduplicate_items(items: Iterable[ParsedInventoryItem]) -> Tuple[List[ParsedInventoryItem], int]:
    """
    Keep the first item seen for each item/manufacturer code pair.

    Later occurrences are dropped even when their fields disagree with the
    first one.

    Returns:
        Tuple of (unique items in first-seen order, number of dropped duplicates)
    """
    unique: Dict[str, ParsedInventoryItem] = {}
    dropped = 0

    for item in items:
        if item.key in unique:
            dropped += 1
            logger.debug(f"Dropping duplicate item {item.key}")
            continue
        unique[item.key] = item

    return list(unique.values()), dropped


def sum_totals(items: Iterable[ParsedInventoryItem]) -> Tuple[int, Decimal]:
    """Sum total quantity and cost over ``items``."""
    total_quantity = 0
    total_cost = Decimal('0')
    for item in items:
        total_quantity += item.total_quantity
        total_cost += item.cost
    return total_quantity, total_cost


def find_grand_total(lines: Iterable[str]) -> Optional[Tuple[int, Decimal]]:
    """Return quantity and cost from the first "GRAND TOTAL:" line, if any."""
    for line in lines:
        match = GRAND_TOTAL_PATTERN.search(line)
        if match:
            return int(match.group(1)), Decimal(match.group(2))
    return None


def legacy_totals(lines: Iterable[str], items: List[ParsedInventoryItem]) -> Tuple[int, Decimal]:
    """
    Totals as the legacy parser computes them.

    The report's own grand total line is trusted when present; summation is
    used only when it is missing or reports a zero quantity.
    """
    grand_total = find_grand_total(lines)
    if grand_total is not None and grand_total[0] != 0:
        logger.info(f"Using report grand total: quantity={grand_total[0]}, cost={grand_total[1]}")
        return grand_total
    return sum_totals(items)
