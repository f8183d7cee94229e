"""Unit tests for the food gate and category classifier."""

import pytest

from grocery_enrichment.domain.classification.classifier import (
    categorize,
    classify_non_food,
    is_food,
    map_provider_category,
)
from grocery_enrichment.domain.classification.models import ShoppingCategory


class TestFoodGate:
    """Stage A: non-food detection."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Lysol Disinfectant Spray", ShoppingCategory.CLEANING_HOUSEHOLD),
            ("Bounty Paper Towels", ShoppingCategory.CLEANING_HOUSEHOLD),
            ("Tide laundry detergent", ShoppingCategory.CLEANING_HOUSEHOLD),
            ("AA Batteries", ShoppingCategory.CLEANING_HOUSEHOLD),
            ("Pampers Diapers size 3", ShoppingCategory.BABY_PERSONAL_CARE),
            ("Colgate Toothpaste", ShoppingCategory.BABY_PERSONAL_CARE),
            ("Purina Dog Food", ShoppingCategory.PET_SUPPLIES),
        ],
    )
    def test_non_food_items(self, name: str, expected: ShoppingCategory) -> None:
        assert classify_non_food(name) == expected
        assert not is_food(name)

    @pytest.mark.parametrize(
        "name",
        ["bananas", "chicken breast", "brown rice", "carpet"],
    )
    def test_whole_word_matching(self, name: str) -> None:
        """'pet' must not fire inside 'carpet', 'ice' not inside 'rice'."""
        assert is_food(name)

    @pytest.mark.parametrize(
        "name",
        ["Polish Sausage", "polish kielbasa links", "Clean Protein Bar"],
    )
    def test_food_phrases_pass_the_gate(self, name: str) -> None:
        assert classify_non_food(name) is None

    def test_food_phrase_does_not_hide_other_keywords(self) -> None:
        assert classify_non_food("silver polish") == ShoppingCategory.CLEANING_HOUSEHOLD
        assert classify_non_food("clean protein bar dog treats") == ShoppingCategory.PET_SUPPLIES

    def test_polish_sausage_categorized_as_meat(self) -> None:
        assert categorize("Polish sausage") == ShoppingCategory.MEAT_SEAFOOD

    def test_empty_name_is_food(self) -> None:
        assert classify_non_food("") is None


class TestCategorize:
    """Stage B: shopping category."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("red apple", ShoppingCategory.PRODUCE),
            ("Roma Tomatoes", ShoppingCategory.PRODUCE),
            ("fresh strawberries", ShoppingCategory.PRODUCE),
            ("ground beef", ShoppingCategory.MEAT_SEAFOOD),
            ("cheddar cheese", ShoppingCategory.DAIRY),
            ("sourdough bread", ShoppingCategory.BAKERY),
            ("brown rice", ShoppingCategory.PANTRY),
            ("diet soda", ShoppingCategory.BEVERAGES),
            ("sparkling water", ShoppingCategory.BEVERAGES),
            ("microwave popcorn", ShoppingCategory.SNACKS),
            ("pretzels", ShoppingCategory.SNACKS),
            ("frozen pizza", ShoppingCategory.FROZEN),
            ("vanilla ice cream", ShoppingCategory.FROZEN),
            ("quinoa", ShoppingCategory.OTHER),
        ],
    )
    def test_name_keywords(self, name: str, expected: ShoppingCategory) -> None:
        assert categorize(name) == expected

    def test_non_food_groups_win(self) -> None:
        assert categorize("Lysol Disinfectant Spray") == ShoppingCategory.CLEANING_HOUSEHOLD

    def test_provider_category_first(self) -> None:
        assert categorize("mystery item", "Frozen") == ShoppingCategory.FROZEN
        assert categorize("red apple", "Dairy and Egg Products") == ShoppingCategory.DAIRY

    def test_unmapped_provider_category_uses_name(self) -> None:
        assert categorize("red apple", "Natural & Organic") == ShoppingCategory.PRODUCE

    @pytest.mark.parametrize(
        ("provider_category", "expected"),
        [
            ("Meat & Seafood", ShoppingCategory.MEAT_SEAFOOD),
            ("Poultry Products", ShoppingCategory.MEAT_SEAFOOD),
            ("Baked Products", ShoppingCategory.BAKERY),
            ("Fats and Oils", ShoppingCategory.PANTRY),
            ("Cleaning Products", ShoppingCategory.CLEANING_HOUSEHOLD),
            ("Natural & Organic", None),
            (None, None),
        ],
    )
    def test_map_provider_category(
        self, provider_category: str | None, expected: ShoppingCategory | None
    ) -> None:
        assert map_provider_category(provider_category) == expected
