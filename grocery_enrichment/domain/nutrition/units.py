"""
Unit conversion and nutrition scaling.

Everything is normalized to grams. Volumes use water density and a
bare item count is 100 g; both are coarse on purpose and other code
relies on the exact constants.
"""

from typing import Final, Optional

from grocery_enrichment.domain.nutrition.models import NUTRIENT_FIELDS, NutritionRecord
from grocery_enrichment.domain.shared.errors import InvalidQuantityError

GRAMS_PER_UNIT: Final[dict[str, float]] = {
    # weight
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.35,
    "lb": 453.59,
    # volume, water-density equivalents
    "ml": 1.0,
    "l": 1000.0,
    "cup": 240.0,
    "tbsp": 15.0,
    "tsp": 5.0,
    # count
    "item": 100.0,
}

UNIT_ALIASES: Final[dict[str, str]] = {
    "gram": "g",
    "grams": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "ounce": "oz",
    "ounces": "oz",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    "milliliter": "ml",
    "milliliters": "ml",
    "liter": "l",
    "liters": "l",
    "cups": "cup",
    "c": "cup",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "tbs": "tbsp",
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "items": "item",
    "each": "item",
}


def normalize_unit(unit: Optional[str]) -> str:
    """Canonical unit name; a missing unit means grams.

    Example:
        >>> normalize_unit("Pounds")
        'lb'
        >>> normalize_unit(None)
        'g'
    """
    if not unit or not unit.strip():
        return "g"
    lowered = unit.strip().lower()
    return UNIT_ALIASES.get(lowered, lowered)


def is_known_unit(unit: Optional[str]) -> bool:
    """True when ``unit`` has a gram conversion."""
    return normalize_unit(unit) in GRAMS_PER_UNIT


def _check_amount(amount: float) -> float:
    try:
        value = float(amount)
    except (TypeError, ValueError) as e:
        raise InvalidQuantityError(f"Quantity is not a number: {amount!r}") from e
    if value < 0:
        raise InvalidQuantityError(f"Quantity must be non-negative: {amount}")
    return value


def to_grams(amount: float, unit: Optional[str]) -> float:
    """Convert a quantity to grams.

    Unknown units pass the amount through unchanged.

    Raises:
        InvalidQuantityError: If amount is negative or not numeric

    Example:
        >>> to_grams(2, "lb")
        907.18
        >>> to_grams(3, "items")
        300.0
    """
    value = _check_amount(amount)
    factor = GRAMS_PER_UNIT.get(normalize_unit(unit))
    if factor is None:
        return value
    return value * factor


def from_grams(grams: float, unit: Optional[str]) -> float:
    """Inverse of ``to_grams``.

    Example:
        >>> round(from_grams(907.18, "lb"), 2)
        2.0
    """
    value = _check_amount(grams)
    factor = GRAMS_PER_UNIT.get(normalize_unit(unit))
    if factor is None:
        return value
    return value / factor


def scale_factor(
    amount: float,
    unit: Optional[str],
    serving_size: float,
    serving_unit: Optional[str],
) -> float:
    """Ratio between an ingredient quantity and a reference serving.

    Returns 1.0 when the serving converts to zero grams.

    Example:
        >>> scale_factor(1, "cup", 100, "g")
        2.4
    """
    ingredient_grams = to_grams(amount, unit)
    serving_grams = to_grams(serving_size, serving_unit)

    if serving_grams == 0:
        return 1.0

    return ingredient_grams / serving_grams


def scale_record(record: NutritionRecord, factor: float) -> NutritionRecord:
    """Multiply every nutrient (and the serving size) by ``factor``.

    Values are not rounded. The serving size must stay positive, so it
    is kept as is when the scaled size would reach zero.
    """
    factor = _check_amount(factor)

    update: dict[str, float] = {
        name: getattr(record, name) * factor for name in NUTRIENT_FIELDS
    }
    serving_size = record.serving_size * factor
    if serving_size > 0:
        update["serving_size"] = serving_size

    return NutritionRecord.model_validate({**record.model_dump(), **update})


def nutrition_for_amount(
    record: NutritionRecord,
    amount: float,
    unit: Optional[str],
) -> NutritionRecord:
    """Scale a per-serving record to ``amount`` ``unit``.

    Example:
        >>> per_100g = NutritionRecord(calories=52.0, carbs=14.0)
        >>> nutrition_for_amount(per_100g, 2, "item").calories
        104.0
    """
    factor = scale_factor(amount, unit, record.serving_size, record.serving_unit)
    return scale_record(record, factor)
