"""
Shared fixtures for engine tests.

Providers are AsyncMocks shaped like the real clients; every test gets
fresh service instances so cache and in-flight state never leak.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from grocery_enrichment.application.enrichment_scheduler import BackgroundEnrichmentScheduler
from grocery_enrichment.application.lookup_service import NutritionLookupService
from grocery_enrichment.domain.inventory.models import StoredItem
from grocery_enrichment.domain.nutrition.provider_models import (
    PrimaryProduct,
    SecondaryFood,
)
from grocery_enrichment.infrastructure.cache.ttl_cache import TTLCache
from grocery_enrichment.infrastructure.persistence.in_memory_item_store import (
    InMemoryItemStore,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def kroger_milk() -> PrimaryProduct:
    """Retail milk with a complete label."""
    return PrimaryProduct(
        product_id="0001111041700",
        name="Kroger 2% Reduced Fat Milk",
        upc="0001111041700",
        brand="Kroger",
        catalog_category="Dairy",
        price=3.49,
        nutrition_label={
            "calories": "120",
            "protein": "8g",
            "totalCarbohydrate": "12g",
            "totalFat": "5g",
            "sugars": "12g",
            "sodium": "115mg",
            "servingSize": "1 cup",
        },
    )


@pytest.fixture
def usda_milk() -> SecondaryFood:
    """Reference milk per 100 g."""
    return SecondaryFood(
        fdc_id="746778",
        description="Milk, reduced fat, fluid, 2% milkfat",
        food_category="Dairy and Egg Products",
        data_type="Foundation",
        nutrients_by_id={1008: 50.0, 1003: 3.36, 1005: 4.9, 1004: 1.9, 1093: 39.0},
    )


@pytest.fixture
def sample_kroger_payload() -> dict[str, Any]:
    """Raw Kroger /products response."""
    return {
        "data": [
            {
                "productId": "0001111060903",
                "upc": "0001111060903",
                "description": "Kroger Large White Eggs",
                "brand": "Kroger",
                "categories": ["Dairy", "Natural & Organic"],
                "items": [
                    {
                        "price": {"regular": 2.99, "promo": 0},
                        "nutrition": {
                            "nutritionLabel": {
                                "calories": "70",
                                "protein": "6g",
                                "totalCarbohydrate": "<1g",
                                "totalFat": "5g",
                                "sodium": "70mg",
                            }
                        },
                    }
                ],
            }
        ]
    }


@pytest.fixture
def sample_usda_payload() -> dict[str, Any]:
    """Raw USDA foods/search response."""
    return {
        "totalHits": 2,
        "foods": [
            {
                "fdcId": 171287,
                "description": "Egg, whole, raw, fresh",
                "dataType": "SR Legacy",
                "foodCategory": "Dairy and Egg Products",
                "foodNutrients": [
                    {"nutrientId": 1008, "value": 143},
                    {"nutrientId": 1003, "value": 12.6},
                    {"nutrientId": 1005, "value": 0.72},
                    {"nutrientId": 1004, "value": 9.51},
                    {"nutrientId": 1093, "value": 142},
                    {"nutrientId": 1253, "value": 372},
                ],
            },
            {
                "fdcId": 2055212,
                "description": "Large white eggs",
                "dataType": "Branded",
                "brandOwner": "The Kroger Co.",
                "servingSize": 50,
                "servingSizeUnit": "g",
                "foodNutrients": [
                    {"nutrientNumber": "208", "value": 140},
                    {"nutrientNumber": "203", "value": 12},
                ],
            },
        ],
    }


# ═══════════════════════════════════════════════════════════
# SERVICE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def primary_provider() -> AsyncMock:
    """Primary provider returning nothing by default."""
    provider = AsyncMock()
    provider.search_products = AsyncMock(return_value=[])
    return provider


@pytest.fixture
def secondary_provider() -> AsyncMock:
    """Secondary provider returning nothing by default."""
    provider = AsyncMock()
    provider.search_foods = AsyncMock(return_value=[])
    return provider


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    return TTLCache(ttl_seconds=3600, clock=clock)


@pytest.fixture
def lookup_service(
    primary_provider: AsyncMock,
    secondary_provider: AsyncMock,
    cache: TTLCache,
) -> NutritionLookupService:
    return NutritionLookupService(primary_provider, secondary_provider, cache)


@pytest.fixture
def scheduler(lookup_service: NutritionLookupService) -> BackgroundEnrichmentScheduler:
    return BackgroundEnrichmentScheduler(lookup_service, interval_seconds=0.0)


@pytest.fixture
def item_store() -> InMemoryItemStore:
    """Store with two items to enrich, one enriched and one recipe placeholder."""
    return InMemoryItemStore(
        [
            StoredItem(item_id="1", name="milk"),
            StoredItem(item_id="2", name="bananas"),
            StoredItem(item_id="3", name="eggs", calories=70),
            StoredItem(item_id="4", name="garlic", category="Recipe Ingredient"),
        ]
    )
