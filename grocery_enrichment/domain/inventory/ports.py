"""Port (interface) for the item store the enrichment results land in.

The store itself (schema, auth, hosting) lives outside this package;
the engine only needs these two operations.
"""

from typing import Any, Protocol

from grocery_enrichment.domain.inventory.models import EnrichmentTask


class ItemStore(Protocol):
    """
    Interface for persisted grocery items.

    Implementations can be:
    - Hosted relational store (production)
    - In-memory store (tests, local runs)
    """

    async def update(self, item_id: str, fields: dict[str, Any]) -> None:
        """
        Overwrite fields of one item.

        Args:
            item_id: Store identifier
            fields: {category, calories, protein, carbs, fat,
                serving_size, serving_unit}

        Raises:
            PersistenceError: If the write fails
        """
        ...

    async def find_items_missing_nutrition(self) -> list[EnrichmentTask]:
        """
        Items with no calories recorded yet.

        Returns:
            One task per item needing enrichment
        """
        ...
