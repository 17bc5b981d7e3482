"""Rules comparing the target field with a sibling field."""

import numbers
from datetime import date
from typing import Any

from ..context import MISSING, ValidationContext
from ..outcome import SUCCESS, Failure, Outcome
from .base import Rule, require_field_name, unknown_property
from .registry import register_rule


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def _is_orderable(value: Any) -> bool:
    """Type defines its own ordering (``object`` only provides identity)."""
    return type(value).__lt__ is not object.__lt__


@register_rule("compare_fields")
class CompareFields(Rule):
    """Target must equal (or, with ``must_be_equal=False``, differ from) a sibling."""

    def __init__(self, other_field: str, must_be_equal: bool = True):
        self.other_field = require_field_name(other_field, "other_field", self.kind)
        self.must_be_equal = bool(must_be_equal)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)

        equal = value == other
        if self.must_be_equal and not equal:
            return self.fail(f"{context.display_name} must be equal to {self.other_field}.")
        if not self.must_be_equal and equal:
            return self.fail(f"{context.display_name} must be different from {self.other_field}.")
        return SUCCESS


@register_rule("not_equal_to")
class NotEqualTo(Rule):
    """Target must not equal a sibling. Two None values count as equal."""

    def __init__(self, other_field: str):
        self.other_field = require_field_name(other_field, "other_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)
        if value == other:
            return self.fail(f"{context.display_name} must not be equal to {self.other_field}.")
        return SUCCESS


@register_rule("greater_than")
class GreaterThan(Rule):
    """Target must be strictly greater than a sibling. None on either side passes."""

    def __init__(self, other_field: str):
        self.other_field = require_field_name(other_field, "other_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)
        if value is None or other is None:
            return SUCCESS

        if not (_is_orderable(value) and _is_orderable(other)):
            return Failure("Both properties must be comparable.")
        try:
            greater = value > other
        except TypeError:
            return Failure("Error comparing properties.")
        if not greater:
            return self.fail(f"{context.display_name} must be greater than {self.other_field}.")
        return SUCCESS


@register_rule("less_than")
class LessThan(Rule):
    """Target must be strictly less than a sibling.

    Only numbers and dates are supported. A None target passes without
    resolving the sibling; a None sibling passes too.
    """

    def __init__(self, other_field: str):
        self.other_field = require_field_name(other_field, "other_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)
        if other is None:
            return SUCCESS

        both_numbers = _is_number(value) and _is_number(other)
        both_dates = isinstance(value, date) and isinstance(other, date)
        if not (both_numbers or both_dates):
            return Failure(f"{self.kind} only supports numeric and date types")

        try:
            less = value < other
        except TypeError:
            return Failure(f"Error comparing properties: {context.member_name} and {self.other_field}")
        if less:
            return SUCCESS
        return self.fail(f"{context.display_name} must be less than {self.other_field}")
