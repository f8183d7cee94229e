"""Nutrition records, provider shapes, merging and unit scaling."""

from grocery_enrichment.domain.nutrition.merge import merge_nutrition, select_secondary_match
from grocery_enrichment.domain.nutrition.models import NutritionRecord, NutritionSource
from grocery_enrichment.domain.nutrition.provider_models import PrimaryProduct, SecondaryFood

__all__ = [
    "NutritionRecord",
    "NutritionSource",
    "PrimaryProduct",
    "SecondaryFood",
    "merge_nutrition",
    "select_secondary_match",
]
