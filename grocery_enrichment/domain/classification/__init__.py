"""Food gate and shopping category classification."""

from grocery_enrichment.domain.classification.classifier import (
    categorize,
    classify_non_food,
    is_food,
)
from grocery_enrichment.domain.classification.models import ShoppingCategory

__all__ = ["ShoppingCategory", "categorize", "classify_non_food", "is_food"]
