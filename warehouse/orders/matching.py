"""
Matching of an order line (material, specification) to an inventory row.

Strategies run in order and the first hit wins:

1. exact match on material and specification, ignoring case and padding
2. same material with one specification contained in the other
3. exact match on the raw, unnormalized values
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from .domain import InventoryItem


def _normalize(value):
    if value is None:
        return ''
    return str(value).strip().lower()


def match_exact_ignore_case(items, material, specification):
    material, specification = _normalize(material), _normalize(specification)
    for item in items:
        if _normalize(item.material) == material and _normalize(item.specification) == specification:
            return item
    return None


def match_specification_contains(items, material, specification):
    material, specification = _normalize(material), _normalize(specification)
    if not specification:
        return None
    for item in items:
        if _normalize(item.material) != material:
            continue
        candidate = _normalize(item.specification)
        if candidate and (specification in candidate or candidate in specification):
            return item
    return None


def match_raw(items, material, specification):
    for item in items:
        if item.material == material and item.specification == specification:
            return item
    return None


MATCH_STRATEGIES = (
    match_exact_ignore_case,
    match_specification_contains,
    match_raw,
)


def match_inventory(items: Iterable[InventoryItem], material, specification) -> Optional[InventoryItem]:
    items = list(items)
    for strategy in MATCH_STRATEGIES:
        found = strategy(items, material, specification)
        if found is not None:
            return found
    return None


def available_quantity(items, material, specification):
    """Stock on hand for a line; unmatched lines have nothing available"""
    found = match_inventory(items, material, specification)
    return found.quantity if found is not None else Decimal('0')
