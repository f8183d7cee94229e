"""
Provider domain models.

Normalized shapes of the two nutrition providers' candidates:
- PrimaryProduct: retail catalog product (Kroger)
- SecondaryFood: reference database food (USDA FoodData Central)
"""

from typing import Any, Final, Optional

from pydantic import BaseModel, ConfigDict, Field

from grocery_enrichment.domain.nutrition.label_parser import parse_leading_number

# Retail nutrition label keys → our nutrient names
PRIMARY_LABEL_FIELDS: Final[dict[str, str]] = {
    "calories": "calories",
    "protein": "protein",
    "totalCarbohydrate": "carbs",
    "totalFat": "fat",
    "dietaryFiber": "fiber",
    "sugars": "sugar",
    "sodium": "sodium",
}

# USDA nutrient IDs → our nutrient names
SECONDARY_NUTRIENT_IDS: Final[dict[int, str]] = {
    1008: "calories",  # Energy (kcal)
    1003: "protein",  # Protein (g)
    1005: "carbs",  # Carbohydrate, by difference (g)
    1004: "fat",  # Total lipid (fat) (g)
    1079: "fiber",  # Fiber, total dietary (g)
    2000: "sugar",  # Sugars, total (g)
    1093: "sodium",  # Sodium, Na (mg)
}


class PrimaryProduct(BaseModel):
    """Retail catalog candidate.

    ``nutrition_label`` keeps the label exactly as the catalog sent it;
    ``nutrition()`` parses it.

    Example:
        >>> product = PrimaryProduct(
        ...     product_id="0001111041700",
        ...     name="Kroger 2% Reduced Fat Milk",
        ...     nutrition_label={"calories": "120", "protein": "8g"},
        ... )
        >>> product.nutrition()["protein"]
        8.0
    """

    model_config = ConfigDict(frozen=True)

    product_id: str = Field(..., description="Catalog product ID")
    name: str = Field(..., description="Product description")
    upc: Optional[str] = Field(None, description="Barcode")
    brand: Optional[str] = Field(None, description="Brand name")
    catalog_category: Optional[str] = Field(None, description="First catalog category")
    price: Optional[float] = Field(None, ge=0, description="Promo or regular price")
    nutrition_label: dict[str, Any] = Field(default_factory=dict, description="Raw label")

    def nutrition(self) -> dict[str, float]:
        """Parsed label values keyed by nutrient name (missing → 0)."""
        parsed = {name: 0.0 for name in PRIMARY_LABEL_FIELDS.values()}
        for label_key, field_name in PRIMARY_LABEL_FIELDS.items():
            parsed[field_name] = parse_leading_number(self.nutrition_label.get(label_key))
        return parsed


class SecondaryFood(BaseModel):
    """Reference database candidate.

    Example:
        >>> food = SecondaryFood(
        ...     fdc_id="171688",
        ...     description="Apples, raw, with skin",
        ...     nutrients_by_id={1008: 52.0, 1003: 0.26},
        ... )
        >>> food.nutrition()["calories"]
        52.0
    """

    model_config = ConfigDict(frozen=True)

    fdc_id: str = Field(..., description="FoodData Central ID")
    description: str = Field(..., description="Food description")
    brand_name: Optional[str] = Field(None, description="Brand (branded foods)")
    food_category: Optional[str] = Field(None, description="Database food category")
    data_type: Optional[str] = Field(None, description="Database type")
    serving_size: float = Field(100.0, gt=0, description="Serving amount")
    serving_unit: str = Field("g", min_length=1, description="Serving unit")
    nutrients_by_id: dict[int, float] = Field(default_factory=dict, description="Nutrient values")

    def nutrition(self) -> dict[str, float]:
        """Nutrient values keyed by nutrient name (missing → 0)."""
        values = {name: 0.0 for name in SECONDARY_NUTRIENT_IDS.values()}
        for nutrient_id, field_name in SECONDARY_NUTRIENT_IDS.items():
            values[field_name] = parse_leading_number(self.nutrients_by_id.get(nutrient_id))
        return values
