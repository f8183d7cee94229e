"""
Unit tests for BackgroundEnrichmentScheduler.

Provider mocks sleep briefly so concurrent tasks really overlap.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from grocery_enrichment.application.enrichment_scheduler import (
    BackgroundEnrichmentScheduler,
    BatchEnrichmentResult,
    persisting_handler,
)
from grocery_enrichment.application.lookup_service import NutritionLookupService
from grocery_enrichment.domain.inventory.models import EnrichmentTask
from grocery_enrichment.domain.nutrition.models import NutritionRecord
from grocery_enrichment.domain.nutrition.provider_models import SecondaryFood
from grocery_enrichment.domain.shared.errors import PersistenceError
from grocery_enrichment.infrastructure.persistence.in_memory_item_store import (
    InMemoryItemStore,
)


@pytest.fixture
def slow_secondary(secondary_provider: AsyncMock) -> AsyncMock:
    """Secondary provider answering after 20 ms with one food per query."""

    async def _search(query: str, page_size: int = 5) -> list[SecondaryFood]:
        await asyncio.sleep(0.02)
        return [
            SecondaryFood(
                fdc_id=f"fdc-{query}",
                description=query,
                nutrients_by_id={1008: 100.0, 1003: 5.0},
            )
        ]

    secondary_provider.search_foods.side_effect = _search
    return secondary_provider


class TestEnrichOne:
    """Single-item enrichment and deduplication."""

    @pytest.mark.asyncio
    async def test_returns_record_and_calls_handler(
        self, scheduler: BackgroundEnrichmentScheduler, slow_secondary: AsyncMock
    ) -> None:
        handler = AsyncMock()

        record = await scheduler.enrich_one("1", "oat milk", handler)

        assert record is not None
        assert record.calories == 100
        handler.assert_awaited_once_with("1", record)
        assert scheduler.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_concurrent_same_id_deduplicated(
        self, scheduler: BackgroundEnrichmentScheduler, slow_secondary: AsyncMock
    ) -> None:
        handler = AsyncMock()

        results = await asyncio.gather(
            scheduler.enrich_one("1", "oat milk", handler),
            scheduler.enrich_one("1", "oat milk", handler),
        )

        assert sum(result is None for result in results) == 1
        assert slow_secondary.search_foods.await_count == 1
        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_in_flight_visible_while_running(
        self, scheduler: BackgroundEnrichmentScheduler, slow_secondary: AsyncMock
    ) -> None:
        task = asyncio.create_task(scheduler.enrich_one("7", "kale", AsyncMock()))
        await asyncio.sleep(0)

        assert scheduler.in_flight == frozenset({"7"})

        await task
        assert scheduler.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_handler_failure_frees_slot(
        self, scheduler: BackgroundEnrichmentScheduler, slow_secondary: AsyncMock
    ) -> None:
        failing = AsyncMock(side_effect=PersistenceError("store offline"))

        record = await scheduler.enrich_one("1", "oat milk", failing)

        assert record is not None
        assert scheduler.in_flight == frozenset()

        handler = AsyncMock()
        assert await scheduler.enrich_one("1", "oat milk", handler) is not None
        handler.assert_awaited_once()


class TestEnrichBatch:
    """Batches, staggering and outcome counts."""

    @pytest.mark.asyncio
    async def test_empty_batch(self, scheduler: BackgroundEnrichmentScheduler) -> None:
        assert await scheduler.enrich_batch([], AsyncMock()) == BatchEnrichmentResult()

    @pytest.mark.asyncio
    async def test_counts_outcomes(
        self, scheduler: BackgroundEnrichmentScheduler, slow_secondary: AsyncMock
    ) -> None:
        async def handler(item_id: str, record: NutritionRecord) -> None:
            if item_id == "3":
                raise PersistenceError("write failed")

        result = await scheduler.enrich_batch(
            [
                EnrichmentTask(item_id="1", raw_name="oat milk"),
                EnrichmentTask(item_id="1", raw_name="oat milk"),
                EnrichmentTask(item_id="2", raw_name="kale"),
                EnrichmentTask(item_id="3", raw_name="tofu"),
            ],
            handler,
        )

        assert result == BatchEnrichmentResult(completed=2, skipped=1, failed=1)
        assert result.total == 4
        assert scheduler.in_flight == frozenset()

    @pytest.mark.asyncio
    async def test_starts_are_staggered(
        self, lookup_service: NutritionLookupService, secondary_provider: AsyncMock
    ) -> None:
        loop = asyncio.get_running_loop()
        started: dict[str, float] = {}

        async def _search(query: str, page_size: int = 5) -> list[SecondaryFood]:
            started[query] = loop.time()
            return []

        secondary_provider.search_foods.side_effect = _search
        scheduler = BackgroundEnrichmentScheduler(lookup_service, interval_seconds=0.05)

        batch_start = loop.time()
        await scheduler.enrich_batch(
            [
                EnrichmentTask(item_id="a", raw_name="apples"),
                EnrichmentTask(item_id="b", raw_name="bread"),
                EnrichmentTask(item_id="c", raw_name="cheese"),
            ],
            AsyncMock(),
        )

        assert started["apples"] - batch_start < 0.05
        assert started["bread"] - batch_start >= 0.05 - 1e-3
        assert started["cheese"] - batch_start >= 0.10 - 1e-3

    def test_negative_interval_rejected(self, lookup_service: NutritionLookupService) -> None:
        with pytest.raises(ValueError):
            BackgroundEnrichmentScheduler(lookup_service, interval_seconds=-1)


class TestEnrichMissing:
    """Store-driven enrichment."""

    @pytest.mark.asyncio
    async def test_updates_items_without_calories(
        self,
        scheduler: BackgroundEnrichmentScheduler,
        slow_secondary: AsyncMock,
        item_store: InMemoryItemStore,
    ) -> None:
        result = await scheduler.enrich_missing(item_store)

        assert result.completed == 2
        milk = item_store.get("1")
        bananas = item_store.get("2")
        assert milk is not None and milk.calories == 100
        assert milk.category == "Dairy"
        assert bananas is not None and bananas.category == "Produce"
        # already enriched and recipe placeholders are left alone
        assert item_store.get("3").calories == 70  # type: ignore[union-attr]
        assert item_store.get("4").calories == 0  # type: ignore[union-attr]

    @pytest.mark.asyncio
    async def test_nothing_to_do(
        self, scheduler: BackgroundEnrichmentScheduler, secondary_provider: AsyncMock
    ) -> None:
        store = InMemoryItemStore()

        assert await scheduler.enrich_missing(store) == BatchEnrichmentResult()
        secondary_provider.search_foods.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_persisting_handler_writes_payload(self) -> None:
        store = AsyncMock()
        record = NutritionRecord(calories=42.0)

        await persisting_handler(store)("9", record)

        store.update.assert_awaited_once_with("9", record.to_item_update())
