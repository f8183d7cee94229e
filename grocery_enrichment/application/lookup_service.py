"""
Nutrition lookup service.

Orchestrates one item lookup across the retail catalog (primary) and
the reference database (secondary), with a food gate in front and a
TTL cache behind.
"""

import time
from typing import Optional

import structlog

from grocery_enrichment.domain.classification.classifier import (
    categorize,
    classify_non_food,
)
from grocery_enrichment.domain.classification.models import ShoppingCategory
from grocery_enrichment.domain.nutrition.merge import merge_nutrition, select_secondary_match
from grocery_enrichment.domain.nutrition.models import NutritionRecord, NutritionSource
from grocery_enrichment.domain.nutrition.ports import (
    PrimaryNutritionProvider,
    SecondaryNutritionProvider,
)
from grocery_enrichment.domain.nutrition.provider_models import (
    PrimaryProduct,
    SecondaryFood,
)
from grocery_enrichment.infrastructure.cache.ttl_cache import TTLCache, make_key

logger = structlog.get_logger(__name__)

# Candidates fetched from the reference database for brand matching
SECONDARY_CANDIDATES = 5


class NutritionLookupService:
    """Resolves nutrition for one grocery item name.

    Flow:
    1. Food gate: non-food names return a zero record, no provider call
    2. Cache hit returns the stored record
    3. Query primary, then secondary (each failure degrades to "no data")
    4. Merge, classify, cache resolved records
    """

    def __init__(
        self,
        primary: Optional[PrimaryNutritionProvider],
        secondary: Optional[SecondaryNutritionProvider],
        cache: Optional[TTLCache] = None,
    ) -> None:
        """Initialize service.

        Args:
            primary: Retail catalog client (None disables it)
            secondary: Reference database client (None disables it)
            cache: Record cache (default 24 h TTL)
        """
        self.primary = primary
        self.secondary = secondary
        self.cache = cache if cache is not None else TTLCache()

    async def quick_lookup(self, name: str, limit: int = 1) -> NutritionRecord:
        """Nutrition record for an item name.

        Never raises: provider failures degrade to a ``fallback`` record
        and anything unexpected yields an ``error`` record.

        Args:
            name: Raw item name as typed by the user
            limit: Primary result limit, part of the cache key

        Returns:
            Record with nutrients, serving, source and category

        Example:
            >>> async def demo(service: NutritionLookupService):
            ...     record = await service.quick_lookup("greek yogurt")
            ...     return record.source, record.category
        """
        try:
            return await self._lookup(name, limit)
        except Exception as e:
            logger.error(
                "Nutrition lookup failed",
                name=name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return NutritionRecord.empty(NutritionSource.ERROR, self._safe_category(name))

    async def _lookup(self, name: str, limit: int) -> NutritionRecord:
        if not name or not name.strip():
            return NutritionRecord.empty(NutritionSource.FALLBACK)

        non_food = classify_non_food(name)
        if non_food is not None:
            logger.debug("Skipping non-food item", name=name, category=non_food.value)
            return NutritionRecord.empty(NutritionSource.NONE, non_food)

        key = make_key(name, limit)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        start_time = time.time()

        primary = await self._fetch_primary(name, limit)
        secondary = await self._fetch_secondary(name, primary.brand if primary else None)

        merged = merge_nutrition(primary, secondary)
        provider_category = (primary.catalog_category if primary else None) or (
            secondary.food_category if secondary else None
        )
        category = categorize(name, provider_category)

        if not merged.source.is_resolved:
            logger.info("No provider data, using fallback", name=name, category=category.value)
            return NutritionRecord.empty(NutritionSource.FALLBACK, category)

        record = merged.model_copy(update={"category": category})
        self.cache.set(key, record)

        logger.info(
            "Nutrition lookup completed",
            name=name,
            source=record.source.value,
            category=category.value,
            calories=record.calories,
            time_ms=round((time.time() - start_time) * 1000, 2),
        )
        return record

    async def _fetch_primary(self, name: str, limit: int) -> Optional[PrimaryProduct]:
        if self.primary is None:
            return None

        try:
            products = await self.primary.search_products(name, limit=limit)
        except Exception as e:
            logger.warning("Primary lookup failed", name=name, error=str(e))
            return None

        return products[0] if products else None

    async def _fetch_secondary(
        self, name: str, brand: Optional[str]
    ) -> Optional[SecondaryFood]:
        if self.secondary is None:
            return None

        try:
            foods = await self.secondary.search_foods(name, page_size=SECONDARY_CANDIDATES)
        except Exception as e:
            logger.warning("Secondary lookup failed", name=name, error=str(e))
            return None

        return select_secondary_match(foods, brand)

    @staticmethod
    def _safe_category(name: str) -> ShoppingCategory:
        try:
            return categorize(name)
        except Exception:
            return ShoppingCategory.OTHER
