"""Unit tests for nutrition label value parsing."""

import pytest

from grocery_enrichment.domain.nutrition.label_parser import parse_leading_number


class TestParseLeadingNumber:
    """Label strings as retail catalogs send them."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("8g", 8.0),
            ("150", 150.0),
            ("<1g", 1.0),
            ("0.5 g", 0.5),
            (".5g", 0.5),
            ("1,200mg", 1200.0),
            ("12g (4%)", 12.0),
        ],
    )
    def test_parses_first_number(self, raw: str, expected: float) -> None:
        assert parse_leading_number(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", "trace", True])
    def test_missing_values_are_zero(self, raw: object) -> None:
        assert parse_leading_number(raw) == 0.0

    def test_numbers_pass_through(self) -> None:
        assert parse_leading_number(42) == 42.0
        assert parse_leading_number(3.25) == 3.25

    def test_never_negative(self) -> None:
        """A leading minus sign is ignored, negative numbers clamp to 0."""
        assert parse_leading_number("-5g") == 5.0
        assert parse_leading_number(-5) == 0.0

    def test_non_finite_is_zero(self) -> None:
        assert parse_leading_number(float("nan")) == 0.0
        assert parse_leading_number(float("inf")) == 0.0
