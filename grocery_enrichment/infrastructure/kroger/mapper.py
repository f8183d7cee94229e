"""
Kroger data mapper.

Transforms Kroger Products API responses to PrimaryProduct models.
"""

from typing import Any, Optional

import structlog

from grocery_enrichment.domain.nutrition.provider_models import PrimaryProduct

logger = structlog.get_logger(__name__)


class KrogerMapper:
    """Maps Kroger API data to domain models."""

    @staticmethod
    def extract_price(product: dict[str, Any]) -> Optional[float]:
        """Promo price when on sale, else regular price.

        Example:
            >>> KrogerMapper.extract_price(
            ...     {"items": [{"price": {"regular": 3.49, "promo": 2.99}}]}
            ... )
            2.99
        """
        items = product.get("items") or []
        if not items:
            return None
        price = (items[0] or {}).get("price") or {}
        promo = price.get("promo") or 0
        if promo > 0:
            return float(promo)
        regular = price.get("regular")
        return float(regular) if regular is not None else None

    @staticmethod
    def extract_nutrition_label(product: dict[str, Any]) -> dict[str, Any]:
        """Raw nutrition label of the first item, or an empty dict."""
        items = product.get("items") or []
        if not items:
            return {}
        nutrition = (items[0] or {}).get("nutrition") or {}
        label = nutrition.get("nutritionLabel") or {}
        return dict(label) if isinstance(label, dict) else {}

    @staticmethod
    def parse_product(product: dict[str, Any]) -> PrimaryProduct:
        """Map one catalog product.

        Example:
            >>> product = KrogerMapper.parse_product(
            ...     {
            ...         "productId": "0001111041700",
            ...         "description": "Kroger 2% Milk",
            ...         "brand": "Kroger",
            ...         "categories": ["Dairy"],
            ...     }
            ... )
            >>> product.catalog_category
            'Dairy'
        """
        categories = product.get("categories") or []
        return PrimaryProduct(
            product_id=str(product.get("productId", "")),
            name=product.get("description", ""),
            upc=product.get("upc"),
            brand=product.get("brand") or None,
            catalog_category=categories[0] if categories else None,
            price=KrogerMapper.extract_price(product),
            nutrition_label=KrogerMapper.extract_nutrition_label(product),
        )

    @staticmethod
    def parse_search_response(data: dict[str, Any]) -> list[PrimaryProduct]:
        """Map a ``/products`` response, skipping malformed entries."""
        products: list[PrimaryProduct] = []

        for raw in data.get("data") or []:
            try:
                products.append(KrogerMapper.parse_product(raw))
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(
                    "Skipping malformed Kroger product",
                    product_id=raw.get("productId") if isinstance(raw, dict) else None,
                    error=str(e),
                )

        return products
