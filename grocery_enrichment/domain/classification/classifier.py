"""
Food gate and shopping category classifier.

Stage A decides whether an item is food at all; non-food items skip
every provider call. Stage B files food items under a shopping
category, trusting the provider's category over the item name.
"""

import re
from functools import lru_cache
from typing import Optional

import structlog

from grocery_enrichment.domain.classification.models import ShoppingCategory
from grocery_enrichment.domain.classification.taxonomy import (
    FOOD_KEYWORDS,
    FOOD_PHRASES,
    NON_FOOD_KEYWORDS,
    PROVIDER_CATEGORY_KEYWORDS,
    KeywordTable,
)

logger = structlog.get_logger(__name__)


@lru_cache(maxsize=256)
def _compile(keywords: tuple[str, ...]) -> re.Pattern[str]:
    """One alternation per keyword group, whole words, optional plural."""
    # longest first so "ice cream" wins over "ice" inside the alternation
    ordered = sorted(keywords, key=len, reverse=True)
    alternation = "|".join(re.escape(keyword) for keyword in ordered)
    return re.compile(rf"\b(?:{alternation})(?:s|es)?\b")


def _scan(text: Optional[str], table: KeywordTable) -> Optional[ShoppingCategory]:
    if not text:
        return None
    lowered = text.lower()
    for category, keywords in table:
        if _compile(keywords).search(lowered):
            return category
    return None


def classify_non_food(name: str) -> Optional[ShoppingCategory]:
    """Non-food category for ``name``, or None when it looks like food.

    Example:
        >>> classify_non_food("Lysol Disinfectant Spray")
        <ShoppingCategory.CLEANING_HOUSEHOLD: 'Cleaning & Household'>
        >>> classify_non_food("bananas") is None
        True
        >>> classify_non_food("Polish sausage") is None
        True
    """
    if not name:
        return None
    masked = _compile(FOOD_PHRASES).sub(" ", name.lower())
    return _scan(masked, NON_FOOD_KEYWORDS)


def is_food(name: str) -> bool:
    """True unless ``name`` hits a non-food keyword group."""
    return classify_non_food(name) is None


def map_provider_category(provider_category: Optional[str]) -> Optional[ShoppingCategory]:
    """Map a provider category string onto the taxonomy.

    Example:
        >>> map_provider_category("Dairy and Egg Products")
        <ShoppingCategory.DAIRY: 'Dairy'>
        >>> map_provider_category("Natural & Organic") is None
        True
    """
    return _scan(provider_category, PROVIDER_CATEGORY_KEYWORDS)


def categorize(name: str, provider_category: Optional[str] = None) -> ShoppingCategory:
    """Shopping category for an item.

    Provider category first, then the item name against the non-food
    and food keyword groups, then ``Other``.

    Args:
        name: Raw item name as typed by the user
        provider_category: Category string from a provider, if any

    Returns:
        Assigned category

    Example:
        >>> categorize("red apple")
        <ShoppingCategory.PRODUCE: 'Produce'>
        >>> categorize("mystery item", "Frozen")
        <ShoppingCategory.FROZEN: 'Frozen'>
    """
    mapped = map_provider_category(provider_category)
    if mapped is not None:
        return mapped

    if provider_category:
        logger.debug(
            "Unmapped provider category",
            provider_category=provider_category,
            name=name,
        )

    return (
        classify_non_food(name)
        or _scan(name, FOOD_KEYWORDS)
        or ShoppingCategory.OTHER
    )
