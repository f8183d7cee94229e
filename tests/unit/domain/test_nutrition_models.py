"""Unit tests for nutrition and provider models."""

import pytest
from pydantic import ValidationError

from grocery_enrichment.domain.classification.models import ShoppingCategory
from grocery_enrichment.domain.nutrition.models import NutritionRecord, NutritionSource
from grocery_enrichment.domain.nutrition.provider_models import (
    PrimaryProduct,
    SecondaryFood,
)


class TestNutritionRecord:
    """Record invariants and store payload."""

    def test_defaults(self) -> None:
        record = NutritionRecord()

        assert record.serving_size == 100.0
        assert record.serving_unit == "g"
        assert record.source == NutritionSource.NONE
        assert record.category == ShoppingCategory.OTHER
        assert not record.has_nutrition

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NutritionRecord(calories=-1)

    def test_zero_serving_rejected(self) -> None:
        with pytest.raises(ValidationError):
            NutritionRecord(serving_size=0)

    def test_frozen(self) -> None:
        record = NutritionRecord()
        with pytest.raises(ValidationError):
            record.calories = 10  # type: ignore[misc]

    def test_to_item_update(self) -> None:
        record = NutritionRecord(
            calories=120,
            protein=8,
            carbs=12,
            fat=5,
            sodium=115,
            serving_size=240,
            serving_unit="ml",
            category=ShoppingCategory.DAIRY,
        )

        assert record.to_item_update() == {
            "category": "Dairy",
            "calories": 120,
            "protein": 8,
            "carbs": 12,
            "fat": 5,
            "serving_size": 240,
            "serving_unit": "ml",
        }

    @pytest.mark.parametrize(
        ("source", "resolved"),
        [
            (NutritionSource.PRIMARY, True),
            (NutritionSource.SECONDARY, True),
            (NutritionSource.PRIMARY_AND_SECONDARY, True),
            (NutritionSource.NONE, False),
            (NutritionSource.FALLBACK, False),
            (NutritionSource.ERROR, False),
        ],
    )
    def test_source_resolution(self, source: NutritionSource, resolved: bool) -> None:
        assert source.is_resolved is resolved


class TestProviderModels:
    """Parsed provider nutrition."""

    def test_primary_label_parsed(self, kroger_milk: PrimaryProduct) -> None:
        nutrition = kroger_milk.nutrition()

        assert nutrition["calories"] == 120.0
        assert nutrition["carbs"] == 12.0
        assert nutrition["sodium"] == 115.0
        assert nutrition["fiber"] == 0.0

    def test_secondary_nutrients_by_id(self, usda_milk: SecondaryFood) -> None:
        nutrition = usda_milk.nutrition()

        assert nutrition["calories"] == 50.0
        assert nutrition["protein"] == 3.36
        assert nutrition["sugar"] == 0.0
