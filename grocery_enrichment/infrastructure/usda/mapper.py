"""
USDA data mapper.

Transforms FoodData Central search responses to SecondaryFood models.
"""

from typing import Any, Optional

import structlog

from grocery_enrichment.domain.nutrition.label_parser import parse_leading_number
from grocery_enrichment.domain.nutrition.provider_models import (
    SECONDARY_NUTRIENT_IDS,
    SecondaryFood,
)

logger = structlog.get_logger(__name__)


class USDAMapper:
    """Maps USDA API data to domain models."""

    # Legacy nutrient numbers → nutrient IDs
    NUTRIENT_NUMBER_TO_ID = {
        "208": 1008,  # Energy (kcal)
        "203": 1003,  # Protein (g)
        "205": 1005,  # Carbohydrate (g)
        "204": 1004,  # Total lipid (fat) (g)
        "291": 1079,  # Fiber, total dietary (g)
        "269": 2000,  # Sugars, total (g)
        "307": 1093,  # Sodium (mg)
    }

    @staticmethod
    def resolve_nutrient_id(nutrient: dict[str, Any]) -> Optional[int]:
        """Nutrient ID from ``nutrientId`` or, failing that, ``nutrientNumber``.

        Example:
            >>> USDAMapper.resolve_nutrient_id({"nutrientId": 1008})
            1008
            >>> USDAMapper.resolve_nutrient_id({"nutrientNumber": "203"})
            1003
        """
        nutrient_id = nutrient.get("nutrientId")
        if nutrient_id is None and isinstance(nutrient.get("nutrient"), dict):
            nutrient_id = nutrient["nutrient"].get("id")

        if nutrient_id is not None:
            try:
                return int(nutrient_id)
            except (TypeError, ValueError):
                return None

        number = nutrient.get("nutrientNumber")
        if number is None:
            return None
        return USDAMapper.NUTRIENT_NUMBER_TO_ID.get(str(number))

    @staticmethod
    def map_nutrients(food_nutrients: list[dict[str, Any]]) -> dict[int, float]:
        """Keep the tracked nutrients, keyed by nutrient ID."""
        values: dict[int, float] = {}

        for nutrient in food_nutrients or []:
            if not isinstance(nutrient, dict):
                continue
            nutrient_id = USDAMapper.resolve_nutrient_id(nutrient)
            if nutrient_id not in SECONDARY_NUTRIENT_IDS:
                continue
            raw = nutrient.get("value", nutrient.get("amount"))
            values[nutrient_id] = parse_leading_number(raw)

        return values

    @staticmethod
    def parse_food(food: dict[str, Any]) -> SecondaryFood:
        """Map one search hit.

        Missing serving size means per 100 g.
        """
        serving_size = parse_leading_number(food.get("servingSize")) or 100.0

        return SecondaryFood(
            fdc_id=str(food.get("fdcId", "")),
            description=food.get("description", ""),
            brand_name=food.get("brandName") or food.get("brandOwner") or None,
            food_category=food.get("foodCategory") or None,
            data_type=food.get("dataType") or None,
            serving_size=serving_size,
            serving_unit=food.get("servingSizeUnit") or "g",
            nutrients_by_id=USDAMapper.map_nutrients(food.get("foodNutrients") or []),
        )

    @staticmethod
    def parse_search_response(data: dict[str, Any]) -> list[SecondaryFood]:
        """Map a ``foods/search`` response, skipping malformed entries.

        Example:
            >>> foods = USDAMapper.parse_search_response(
            ...     {
            ...         "foods": [
            ...             {
            ...                 "fdcId": 171688,
            ...                 "description": "Apples, raw",
            ...                 "foodNutrients": [{"nutrientId": 1008, "value": 52}],
            ...             }
            ...         ]
            ...     }
            ... )
            >>> foods[0].nutrition()["calories"]
            52.0
        """
        foods: list[SecondaryFood] = []

        for raw in data.get("foods") or []:
            try:
                foods.append(USDAMapper.parse_food(raw))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(
                    "Skipping malformed USDA food",
                    fdc_id=raw.get("fdcId") if isinstance(raw, dict) else None,
                    error=str(e),
                )

        return foods
