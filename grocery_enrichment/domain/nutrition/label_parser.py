"""
Nutrition label value parser.

Retail nutrition labels carry values as text ("8g", "150", "<1 g",
"1,200mg"). Everything numeric downstream goes through
``parse_leading_number``.
"""

import math
import re
from typing import Any

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def parse_leading_number(value: Any) -> float:
    """Extract the first numeric literal from a label value.

    Args:
        value: Raw label value (str, int, float or None)

    Returns:
        Parsed non-negative number, 0.0 when nothing numeric is found

    Example:
        >>> parse_leading_number("8g")
        8.0
        >>> parse_leading_number("1,200mg")
        1200.0
        >>> parse_leading_number("less than 1g")
        1.0
        >>> parse_leading_number(None)
        0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
        if not math.isfinite(number):
            return 0.0
        return max(number, 0.0)

    # thousands separators would otherwise split the literal
    text = str(value).replace(",", "")
    match = _LEADING_NUMBER.search(text)
    if match is None:
        return 0.0
    return float(match.group())
