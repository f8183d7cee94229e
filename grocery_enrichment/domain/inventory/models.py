"""
Inventory domain models.

Shapes the engine reads from (inventory entries) or hands to the
background scheduler (enrichment tasks).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class InventoryEntry(BaseModel):
    """Item the user already has. Read-only to the engine.

    Example:
        >>> entry = InventoryEntry(name="Chicken Breast", amount=2, unit="lb")
        >>> entry.unit
        'lb'
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Item name as stored")
    amount: float = Field(0.0, ge=0, description="Quantity on hand")
    unit: Optional[str] = Field(None, description="Quantity unit")
    item_id: Optional[str] = Field(None, description="Store identifier")


class EnrichmentTask(BaseModel):
    """One item waiting for nutrition data."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(..., min_length=1, description="Store identifier")
    raw_name: str = Field(..., description="Item name to look up")


class StoredItem(BaseModel):
    """Item row as kept by an item store."""

    item_id: str = Field(..., min_length=1)
    name: str
    amount: float = Field(1.0, ge=0)
    unit: str = "item"
    category: str = "Other"
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    serving_size: float = Field(100.0, gt=0)
    serving_unit: str = "g"

    def apply(self, fields: dict[str, Any]) -> StoredItem:
        """Copy of this item with ``fields`` overwritten (validated)."""
        return StoredItem.model_validate({**self.model_dump(), **fields})


class IngredientRequirement(BaseModel):
    """Ingredient a recipe needs."""

    model_config = ConfigDict(frozen=True)

    name: str
    amount: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None


class IngredientAvailability(BaseModel):
    """Whether the inventory covers one ingredient."""

    model_config = ConfigDict(frozen=True)

    ingredient: IngredientRequirement
    is_available: bool
    inventory_entry: Optional[InventoryEntry] = None


class AvailabilityReport(BaseModel):
    """Availability of a whole ingredient list."""

    model_config = ConfigDict(frozen=True)

    ingredients: list[IngredientAvailability] = Field(default_factory=list)

    @property
    def all_available(self) -> bool:
        return all(item.is_available for item in self.ingredients)

    @property
    def missing(self) -> list[IngredientRequirement]:
        return [item.ingredient for item in self.ingredients if not item.is_available]
