"""
Engine wiring.

Builds the clients, cache, lookup service and scheduler from settings.
Every call returns fresh objects; nothing is a module singleton.
"""

from contextlib import AsyncExitStack
from dataclasses import dataclass
from typing import Optional

import structlog

from grocery_enrichment.application.enrichment_scheduler import BackgroundEnrichmentScheduler
from grocery_enrichment.application.lookup_service import NutritionLookupService
from grocery_enrichment.config import EngineSettings
from grocery_enrichment.infrastructure.cache.ttl_cache import TTLCache
from grocery_enrichment.infrastructure.kroger.api_client import KrogerClient
from grocery_enrichment.infrastructure.usda.api_client import USDAClient

logger = structlog.get_logger(__name__)


@dataclass
class Engine:
    """Wired engine. Use as an async context manager to open HTTP sessions."""

    settings: EngineSettings
    lookup_service: NutritionLookupService
    scheduler: BackgroundEnrichmentScheduler
    kroger: Optional[KrogerClient] = None
    usda: Optional[USDAClient] = None

    def __post_init__(self) -> None:
        self._stack: Optional[AsyncExitStack] = None

    async def __aenter__(self) -> "Engine":
        stack = AsyncExitStack()
        for client in (self.kroger, self.usda):
            if client is not None:
                await stack.enter_async_context(client)
        self._stack = stack
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._stack is not None:
            await self._stack.aclose()
            self._stack = None


def build_engine(settings: Optional[EngineSettings] = None) -> Engine:
    """Wire an engine; providers without credentials are left out.

    Example:
        >>> async def demo():
        ...     async with build_engine() as engine:
        ...         return await engine.lookup_service.quick_lookup("banana")
    """
    settings = settings or EngineSettings.from_env()

    kroger: Optional[KrogerClient] = None
    if settings.kroger_enabled:
        kroger = KrogerClient(
            client_id=settings.kroger_client_id or "",
            client_secret=settings.kroger_client_secret or "",
            location_id=settings.kroger_location_id,
            timeout_seconds=settings.provider_timeout_seconds,
            max_retries=settings.provider_max_retries,
        )

    usda: Optional[USDAClient] = None
    if settings.usda_enabled:
        usda = USDAClient(
            api_key=settings.usda_api_key or "",
            timeout_seconds=settings.provider_timeout_seconds,
            max_retries=settings.provider_max_retries,
        )

    if kroger is None and usda is None:
        logger.warning("No nutrition provider configured, lookups will fall back")

    lookup_service = NutritionLookupService(
        primary=kroger,
        secondary=usda,
        cache=TTLCache(ttl_seconds=settings.cache_ttl_seconds),
    )
    scheduler = BackgroundEnrichmentScheduler(
        lookup_service,
        interval_seconds=settings.enrichment_interval_seconds,
    )

    return Engine(
        settings=settings,
        lookup_service=lookup_service,
        scheduler=scheduler,
        kroger=kroger,
        usda=usda,
    )
