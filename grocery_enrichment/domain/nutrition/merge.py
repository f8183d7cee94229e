"""
Nutrition reconciliation.

Combines zero, one or two provider candidates into one NutritionRecord.
Retail (primary) values win per nutrient; the reference database
(secondary) fills whatever the retail label leaves at zero.
"""

from typing import Any, Optional, Sequence

from grocery_enrichment.domain.nutrition.models import (
    MACRO_FIELDS,
    NUTRIENT_FIELDS,
    NutritionRecord,
    NutritionSource,
)
from grocery_enrichment.domain.nutrition.provider_models import (
    PrimaryProduct,
    SecondaryFood,
)


def merge_nutrition(
    primary: Optional[PrimaryProduct],
    secondary: Optional[SecondaryFood],
) -> NutritionRecord:
    """Merge provider candidates under primary-wins precedence.

    Steps:
    1. Start from zeros, 100 g serving, source ``none``
    2. Secondary present: copy all of it, source ``secondary``
    3. Primary present: each nutrient > 0 overwrites; source ``primary``
       or ``primary+secondary``
    4. Primary has all four macros > 0: source is ``primary`` even if
       secondary was copied first

    A primary value of 0 means "label missing", never "true zero".

    Args:
        primary: Retail catalog candidate, if any
        secondary: Reference database candidate, if any

    Returns:
        Merged record (category left at default)

    Example:
        >>> primary = PrimaryProduct(
        ...     product_id="1", name="Apple", nutrition_label={"calories": "200"}
        ... )
        >>> secondary = SecondaryFood(
        ...     fdc_id="2", description="Apple", nutrients_by_id={1008: 150.0}
        ... )
        >>> merge_nutrition(primary, secondary).calories
        200.0
    """
    fields: dict[str, Any] = {name: 0.0 for name in NUTRIENT_FIELDS}
    fields["serving_size"] = 100.0
    fields["serving_unit"] = "g"
    source = NutritionSource.NONE

    if secondary is not None:
        fields.update(secondary.nutrition())
        fields["serving_size"] = secondary.serving_size
        fields["serving_unit"] = secondary.serving_unit
        source = NutritionSource.SECONDARY

    if primary is not None:
        primary_values = primary.nutrition()
        for name in NUTRIENT_FIELDS:
            if primary_values[name] > 0:
                fields[name] = primary_values[name]

        source = (
            NutritionSource.PRIMARY
            if secondary is None
            else NutritionSource.PRIMARY_AND_SECONDARY
        )

        if all(primary_values[name] > 0 for name in MACRO_FIELDS):
            source = NutritionSource.PRIMARY

    return NutritionRecord(source=source, **fields)


def select_secondary_match(
    candidates: Sequence[SecondaryFood],
    brand: Optional[str] = None,
) -> Optional[SecondaryFood]:
    """Pick the reference food to merge with.

    Prefers a candidate whose brand contains the retail brand,
    otherwise the first candidate.
    """
    if not candidates:
        return None

    if brand:
        wanted = brand.lower().strip()
        for candidate in candidates:
            if candidate.brand_name and wanted in candidate.brand_name.lower():
                return candidate

    return candidates[0]
