"""
Background enrichment scheduler.

Runs nutrition lookups for many items without blocking the caller:
equal item ids are deduplicated while in flight, and batch starts are
staggered to stay under provider rate limits.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional

import structlog

from grocery_enrichment.application.lookup_service import NutritionLookupService
from grocery_enrichment.domain.inventory.models import EnrichmentTask
from grocery_enrichment.domain.inventory.ports import ItemStore
from grocery_enrichment.domain.nutrition.models import NutritionRecord

logger = structlog.get_logger(__name__)

CompletionHandler = Callable[[str, NutritionRecord], Awaitable[None]]

DEFAULT_INTERVAL_SECONDS = 0.3


class _Outcome(Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchEnrichmentResult:
    """Per-outcome counts of one batch."""

    completed: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.skipped + self.failed


def persisting_handler(store: ItemStore) -> CompletionHandler:
    """Completion handler that writes the record back to ``store``.

    Write failures propagate to the scheduler, which logs them.
    """

    async def _persist(item_id: str, record: NutritionRecord) -> None:
        await store.update(item_id, record.to_item_update())

    return _persist


class BackgroundEnrichmentScheduler:
    """Deduplicating, staggered runner for nutrition lookups.

    The in-flight set is the only concurrency control. It is not locked
    and is only safe on a single event loop.

    Example:
        >>> async def demo(service, store):
        ...     scheduler = BackgroundEnrichmentScheduler(service)
        ...     return await scheduler.enrich_missing(store)
    """

    def __init__(
        self,
        lookup_service: NutritionLookupService,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
    ) -> None:
        """Initialize scheduler.

        Args:
            lookup_service: Service resolving one item
            interval_seconds: Delay between consecutive batch starts
        """
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be non-negative")

        self.lookup_service = lookup_service
        self.interval_seconds = interval_seconds
        self._in_flight: set[str] = set()

    @property
    def in_flight(self) -> frozenset[str]:
        """Snapshot of item ids currently being enriched."""
        return frozenset(self._in_flight)

    async def enrich_one(
        self,
        item_id: str,
        raw_name: str,
        on_done: CompletionHandler,
    ) -> Optional[NutritionRecord]:
        """Enrich one item unless it is already in flight.

        Args:
            item_id: Store identifier, the deduplication key
            raw_name: Item name to look up
            on_done: Awaited with ``(item_id, record)`` after the lookup

        Returns:
            The record, or None when ``item_id`` was already in flight
        """
        record, _ = await self._run(item_id, raw_name, on_done)
        return record

    async def enrich_batch(
        self,
        items: Iterable[EnrichmentTask],
        on_item_done: CompletionHandler,
    ) -> BatchEnrichmentResult:
        """Enrich items concurrently, item ``i`` starting ``i * interval`` late.

        Resolves once every item finished, whatever the outcome.
        """
        tasks = list(items)
        if not tasks:
            return BatchEnrichmentResult()

        logger.info(
            "Starting enrichment batch",
            items=len(tasks),
            interval_seconds=self.interval_seconds,
        )

        outcomes = await asyncio.gather(
            *(
                self._run_staggered(index, task, on_item_done)
                for index, task in enumerate(tasks)
            )
        )

        result = BatchEnrichmentResult(
            completed=outcomes.count(_Outcome.COMPLETED),
            skipped=outcomes.count(_Outcome.SKIPPED),
            failed=outcomes.count(_Outcome.FAILED),
        )
        logger.info(
            "Enrichment batch finished",
            completed=result.completed,
            skipped=result.skipped,
            failed=result.failed,
        )
        return result

    async def enrich_missing(self, store: ItemStore) -> BatchEnrichmentResult:
        """Enrich every store item that has no calories yet."""
        tasks = await store.find_items_missing_nutrition()
        if not tasks:
            logger.debug("No items need enrichment")
            return BatchEnrichmentResult()
        return await self.enrich_batch(tasks, persisting_handler(store))

    async def _run_staggered(
        self,
        index: int,
        task: EnrichmentTask,
        on_done: CompletionHandler,
    ) -> _Outcome:
        if index and self.interval_seconds:
            await asyncio.sleep(index * self.interval_seconds)
        _, outcome = await self._run(task.item_id, task.raw_name, on_done)
        return outcome

    async def _run(
        self,
        item_id: str,
        raw_name: str,
        on_done: CompletionHandler,
    ) -> tuple[Optional[NutritionRecord], _Outcome]:
        # check and claim happen before the first await
        if item_id in self._in_flight:
            logger.debug("Enrichment already in flight", item_id=item_id)
            return None, _Outcome.SKIPPED

        self._in_flight.add(item_id)
        try:
            record = await self.lookup_service.quick_lookup(raw_name)
            try:
                await on_done(item_id, record)
            except Exception as e:
                logger.error(
                    "Enrichment handler failed",
                    item_id=item_id,
                    name=raw_name,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return record, _Outcome.FAILED
            return record, _Outcome.COMPLETED
        finally:
            self._in_flight.discard(item_id)
