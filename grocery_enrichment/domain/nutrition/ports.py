"""
Ports (interfaces) for nutrition providers.

Infrastructure supplies the adapters (KrogerClient, USDAClient); the
lookup service depends only on these shapes.
"""

from typing import Protocol

from grocery_enrichment.domain.nutrition.provider_models import (
    PrimaryProduct,
    SecondaryFood,
)


class PrimaryNutritionProvider(Protocol):
    """Retail catalog with printed nutrition labels."""

    async def search_products(self, term: str, limit: int = 1) -> list[PrimaryProduct]:
        """
        Search products by free text.

        Raises:
            ExternalServiceError: On any provider failure
        """
        ...


class SecondaryNutritionProvider(Protocol):
    """Reference food composition database."""

    async def search_foods(self, query: str, page_size: int = 5) -> list[SecondaryFood]:
        """
        Search foods by description.

        Raises:
            ExternalServiceError: On any provider failure
        """
        ...
