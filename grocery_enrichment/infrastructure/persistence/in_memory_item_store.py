"""
In-memory item store.

Implements ItemStore for tests and local runs. Updates are plain
overwrites, so replaying one is harmless.
"""

from typing import Any, Iterable, Optional

import structlog
from pydantic import ValidationError

from grocery_enrichment.domain.inventory.models import EnrichmentTask, StoredItem
from grocery_enrichment.domain.shared.errors import PersistenceError

logger = structlog.get_logger(__name__)

# Recipe placeholders are never enriched
RECIPE_INGREDIENT_CATEGORY = "Recipe Ingredient"


class InMemoryItemStore:
    """
    In-memory implementation of ItemStore.

    Example:
        >>> store = InMemoryItemStore([StoredItem(item_id="1", name="banana")])
        >>> store.get("1").calories
        0.0
    """

    def __init__(self, items: Optional[Iterable[StoredItem]] = None) -> None:
        self._items: dict[str, StoredItem] = {}
        for item in items or []:
            self.add(item)

    def add(self, item: StoredItem) -> None:
        """Insert or replace an item."""
        self._items[item.item_id] = item

    def get(self, item_id: str) -> Optional[StoredItem]:
        return self._items.get(item_id)

    def all(self) -> list[StoredItem]:
        return list(self._items.values())

    async def update(self, item_id: str, fields: dict[str, Any]) -> None:
        """
        Overwrite fields of one item.

        Raises:
            PersistenceError: Unknown item or invalid field values
        """
        item = self._items.get(item_id)
        if item is None:
            raise PersistenceError(f"Item {item_id} not found")

        try:
            self._items[item_id] = item.apply(fields)
        except ValidationError as e:
            raise PersistenceError(f"Invalid update for item {item_id}: {e}") from e

        logger.debug("Item updated", item_id=item_id, fields=sorted(fields))

    async def find_items_missing_nutrition(self) -> list[EnrichmentTask]:
        """Items with zero calories, excluding recipe placeholders."""
        return [
            EnrichmentTask(item_id=item.item_id, raw_name=item.name)
            for item in self._items.values()
            if item.calories == 0 and item.category != RECIPE_INGREDIENT_CATEGORY
        ]

    def __len__(self) -> int:
        return len(self._items)
