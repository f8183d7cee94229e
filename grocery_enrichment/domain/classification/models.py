"""
Shopping taxonomy.

Closed set of categories an item can be filed under.
"""

from enum import Enum


class ShoppingCategory(str, Enum):
    """Shopping list category.

    The three non-food members never carry nutrition data.

    Example:
        >>> ShoppingCategory("Meat & Seafood") is ShoppingCategory.MEAT_SEAFOOD
        True
        >>> ShoppingCategory.PET_SUPPLIES.is_food
        False
    """

    PRODUCE = "Produce"
    MEAT_SEAFOOD = "Meat & Seafood"
    DAIRY = "Dairy"
    BAKERY = "Bakery"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    CLEANING_HOUSEHOLD = "Cleaning & Household"
    BABY_PERSONAL_CARE = "Baby & Personal Care"
    PET_SUPPLIES = "Pet Supplies"
    OTHER = "Other"

    @property
    def is_food(self) -> bool:
        """True for categories that may carry nutrition data."""
        return self not in NON_FOOD_CATEGORIES


NON_FOOD_CATEGORIES = frozenset(
    {
        ShoppingCategory.CLEANING_HOUSEHOLD,
        ShoppingCategory.BABY_PERSONAL_CARE,
        ShoppingCategory.PET_SUPPLIES,
    }
)
