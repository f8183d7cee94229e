"""
Inventory fuzzy matching.

A name matches an inventory entry when either normalized string
contains the other. The first matching entry in iteration order wins;
there is no scoring.
"""

from typing import Iterable, Optional

from grocery_enrichment.domain.inventory.models import (
    AvailabilityReport,
    IngredientAvailability,
    IngredientRequirement,
    InventoryEntry,
)
from grocery_enrichment.domain.nutrition.units import is_known_unit, normalize_unit, to_grams


def normalize_name(name: Optional[str]) -> str:
    """Lowercase and trim."""
    return (name or "").strip().lower()


def names_match(left: str, right: str) -> bool:
    """Bidirectional containment on normalized names; empty never matches."""
    a = normalize_name(left)
    b = normalize_name(right)
    if not a or not b:
        return False
    return a in b or b in a


def find_inventory_match(
    name: str,
    inventory: Iterable[InventoryEntry],
) -> Optional[InventoryEntry]:
    """First inventory entry whose name fuzzy-matches ``name``.

    Example:
        >>> pantry = [
        ...     InventoryEntry(name="Chicken Broth"),
        ...     InventoryEntry(name="chicken"),
        ... ]
        >>> find_inventory_match("chicken", pantry).name
        'Chicken Broth'
    """
    for entry in inventory:
        if names_match(name, entry.name):
            return entry
    return None


def has_enough_amount(
    inventory_amount: float,
    inventory_unit: Optional[str],
    required_amount: Optional[float],
    required_unit: Optional[str],
) -> bool:
    """Whether the stock covers the required quantity.

    No required amount, or units that cannot be compared, count as
    enough.
    """
    if not required_amount:
        return True

    if normalize_unit(inventory_unit) == normalize_unit(required_unit):
        return inventory_amount >= required_amount

    if is_known_unit(inventory_unit) and is_known_unit(required_unit):
        return to_grams(inventory_amount, inventory_unit) >= to_grams(
            required_amount, required_unit
        )

    return True


def check_availability(
    ingredients: Iterable[IngredientRequirement],
    inventory: Iterable[InventoryEntry],
) -> AvailabilityReport:
    """Match every ingredient against the inventory.

    Example:
        >>> report = check_availability(
        ...     [IngredientRequirement(name="milk", amount=1, unit="cup")],
        ...     [InventoryEntry(name="Whole Milk", amount=1, unit="l")],
        ... )
        >>> report.all_available
        True
    """
    stock = list(inventory)
    results = []
    for ingredient in ingredients:
        entry = find_inventory_match(ingredient.name, stock)
        available = entry is not None and has_enough_amount(
            entry.amount, entry.unit, ingredient.amount, ingredient.unit
        )
        results.append(
            IngredientAvailability(
                ingredient=ingredient,
                is_available=available,
                inventory_entry=entry,
            )
        )
    return AvailabilityReport(ingredients=results)
