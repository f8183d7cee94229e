"""
Nutrition domain models.

Core record produced by every lookup, whatever the providers returned.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

from grocery_enrichment.domain.classification.models import ShoppingCategory

NUTRIENT_FIELDS: Final[tuple[str, ...]] = (
    "calories",
    "protein",
    "carbs",
    "fat",
    "fiber",
    "sugar",
    "sodium",
)

MACRO_FIELDS: Final[tuple[str, ...]] = ("calories", "protein", "carbs", "fat")


class NutritionSource(str, Enum):
    """
    Origin of a nutrition record.

    Indicates which providers contributed to the values.
    """

    NONE = "none"  # nothing looked up (non-food, or merge of two absent results)
    PRIMARY = "primary"  # retail catalog only
    SECONDARY = "secondary"  # reference database only
    PRIMARY_AND_SECONDARY = "primary+secondary"
    FALLBACK = "fallback"  # both providers empty
    ERROR = "error"  # unexpected failure during lookup

    @property
    def is_resolved(self) -> bool:
        """True when at least one provider contributed data."""
        return self in (
            NutritionSource.PRIMARY,
            NutritionSource.SECONDARY,
            NutritionSource.PRIMARY_AND_SECONDARY,
        )


class NutritionRecord(BaseModel):
    """
    Canonical nutrition profile for one grocery item.

    Values describe one serving of ``serving_size`` ``serving_unit``.

    Attributes:
        calories: Energy in kcal
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Total fat in grams
        fiber: Dietary fiber in grams
        sugar: Total sugars in grams
        sodium: Sodium in mg
        serving_size: Reference serving amount
        serving_unit: Unit of the reference serving
        source: Which providers contributed
        category: Shopping category assigned by the classifier

    Example:
        >>> record = NutritionRecord(calories=52.0, protein=0.3)
        >>> record.source
        <NutritionSource.NONE: 'none'>
        >>> record.has_nutrition
        True
    """

    model_config = ConfigDict(frozen=True)

    calories: float = Field(0.0, ge=0, description="Energy in kcal")
    protein: float = Field(0.0, ge=0, description="Protein in g")
    carbs: float = Field(0.0, ge=0, description="Carbohydrates in g")
    fat: float = Field(0.0, ge=0, description="Total fat in g")
    fiber: float = Field(0.0, ge=0, description="Fiber in g")
    sugar: float = Field(0.0, ge=0, description="Sugar in g")
    sodium: float = Field(0.0, ge=0, description="Sodium in mg")

    serving_size: float = Field(100.0, gt=0, description="Reference serving amount")
    serving_unit: str = Field("g", min_length=1, description="Reference serving unit")

    source: NutritionSource = Field(NutritionSource.NONE, description="Data origin")
    category: ShoppingCategory = Field(ShoppingCategory.OTHER, description="Shopping category")

    @classmethod
    def empty(
        cls,
        source: NutritionSource = NutritionSource.NONE,
        category: ShoppingCategory = ShoppingCategory.OTHER,
    ) -> NutritionRecord:
        """Zero-valued record with default 100 g serving."""
        return cls(source=source, category=category)

    @property
    def has_nutrition(self) -> bool:
        """True when the record carries an energy value."""
        return self.calories > 0

    def nutrients(self) -> dict[str, float]:
        """Nutrient values keyed by field name."""
        return {name: getattr(self, name) for name in NUTRIENT_FIELDS}

    def to_item_update(self) -> dict[str, Any]:
        """Payload for ``ItemStore.update``."""
        return {
            "category": self.category.value,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "serving_size": self.serving_size,
            "serving_unit": self.serving_unit,
        }
