"""Allow-list and deny-list rules."""

from typing import Any

from .base import CheckRule
from .registry import register_rule


def _contains(values: tuple, value: Any) -> bool:
    return any(value == candidate for candidate in values)


@register_rule("allowed_values")
class AllowedValues(CheckRule):
    """Value must equal one of ``values``."""

    def __init__(self, *values: Any):
        self.values = tuple(values)

    def is_valid(self, value: Any) -> bool:
        return value is None or _contains(self.values, value)


@register_rule("disallowed_values")
class DisallowedValues(CheckRule):
    """Value must not equal any of ``values``."""

    def __init__(self, *values: Any):
        self.values = tuple(values)

    def is_valid(self, value: Any) -> bool:
        return value is None or not _contains(self.values, value)
