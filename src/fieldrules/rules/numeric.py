"""Numeric rules."""

from decimal import Decimal
from typing import Any

from .base import CheckRule, require_non_negative
from .registry import register_rule


def decimal_scale(value: Decimal) -> int:
    """Number of digits after the decimal point, trailing zeros included."""
    exponent = value.as_tuple().exponent
    if not isinstance(exponent, int):
        # NaN and infinities have no scale
        return 0
    return max(-exponent, 0)


@register_rule("decimal_precision")
class DecimalPrecision(CheckRule):
    """``Decimal`` value may have at most ``precision`` fractional digits."""

    def __init__(self, precision: int):
        self.precision = require_non_negative(precision, "precision", self.kind)

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, Decimal) or not value.is_finite():
            return False
        return decimal_scale(value) <= self.precision
