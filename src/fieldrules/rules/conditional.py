"""Conditional rules: gated on the value of a sibling field.

Two shapes live here. ``ConditionalValidation`` wraps an inner rule and only
delegates to it when its condition holds. The remaining rules bake the
conditional behaviour in (required-if family, pattern-if, range-if).
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from ..context import MISSING, ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Failure, Outcome
from .base import Rule, is_blank, require_field_name, unknown_property
from .registry import RuleFactory, build_rule, register_rule

logger = logging.getLogger(__name__)


class Condition(ABC):
    """Predicate over a sibling field value."""

    @abstractmethod
    def matches(self, value: Any) -> bool:
        pass

    @abstractmethod
    def describe(self) -> str:
        pass


class Equals(Condition):
    def __init__(self, expected: Any):
        self.expected = expected

    def matches(self, value: Any) -> bool:
        return value == self.expected

    def describe(self) -> str:
        return f"equals {self.expected!r}"


class InSet(Condition):
    def __init__(self, *values: Any):
        if not values:
            raise ConfigurationError("InSet requires at least one value")
        self.values = tuple(values)

    def matches(self, value: Any) -> bool:
        return any(value == candidate for candidate in self.values)

    def describe(self) -> str:
        return f"in {list(self.values)!r}"


class IsTrue(Condition):
    def matches(self, value: Any) -> bool:
        return value is True

    def describe(self) -> str:
        return "is true"


class IsFalse(Condition):
    def matches(self, value: Any) -> bool:
        return value is False

    def describe(self) -> str:
        return "is false"


@register_rule("conditional_validation")
class ConditionalValidation(Rule):
    """Run an inner rule only when a sibling field satisfies a condition.

    ``condition`` is either a ``Condition`` or a literal compared by equality.
    The inner rule is built once, here, from ``rule`` and its arguments. A
    missing condition field skips validation. The inner outcome is returned
    unchanged, so a custom message belongs on the inner rule.
    """

    def __init__(self, condition_field: str, condition: Any, rule: RuleFactory, *args: Any, **kwargs: Any):
        self.condition_field = require_field_name(condition_field, "condition_field", self.kind)
        self.condition = condition if isinstance(condition, Condition) else Equals(condition)
        if rule is None:
            raise ConfigurationError("rule is required", self.kind)
        self.inner = build_rule(rule, *args, **kwargs)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.condition_field)
        if current is MISSING:
            return SUCCESS
        if not self.condition.matches(current):
            return SUCCESS

        logger.debug(f"{context.member_name}: {self.condition_field} {self.condition.describe()}, running {self.inner.kind}")
        return self.inner.evaluate(value, context)


@register_rule("conditional_pattern")
class ConditionalPattern(Rule):
    """Target must match ``pattern`` when a sibling equals ``expected_value``.

    When the condition holds, a None or non-string target fails.
    """

    def __init__(self, other_field: str, expected_value: Any, pattern: str):
        self.other_field = require_field_name(other_field, "other_field", self.kind)
        if expected_value is None:
            raise ConfigurationError("expected_value is required", self.kind)
        if not isinstance(pattern, str):
            raise ConfigurationError(f"pattern must be a string, got: {pattern!r}", self.kind)
        try:
            self.regex = re.compile(pattern)
        except re.error as e:
            raise ConfigurationError(f"invalid pattern {pattern!r}: {e}", self.kind) from e
        self.expected_value = expected_value

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)
        if other != self.expected_value:
            return SUCCESS

        condition = f"when {self.other_field} equals {self.expected_value}"
        if not isinstance(value, str):
            return self.fail(f"{context.member_name} must match pattern {condition}")
        if not self.regex.search(value):
            return self.fail(f"{context.member_name} is invalid according to pattern {condition}")
        return SUCCESS


def _format_bound(bound: float) -> str:
    return str(int(bound)) if bound.is_integer() else str(bound)


@register_rule("range_if")
class RangeIf(Rule):
    """Numeric target must lie in ``[minimum, maximum]`` when a sibling equals a value."""

    def __init__(self, dependent_field: str, dependent_value: Any, minimum: float, maximum: float):
        self.dependent_field = require_field_name(dependent_field, "dependent_field", self.kind)
        self.dependent_value = dependent_value
        try:
            self.minimum = float(minimum)
            self.maximum = float(maximum)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"minimum and maximum must be numbers: {e}", self.kind) from e
        if self.minimum > self.maximum:
            raise ConfigurationError("minimum cannot be greater than maximum", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.dependent_field)
        if current is MISSING:
            return unknown_property(self.dependent_field)
        if current != self.dependent_value:
            return SUCCESS
        if value is None:
            return SUCCESS

        try:
            number = float(value)
        except (TypeError, ValueError):
            return Failure(f"{context.member_name} is not a numeric type.")
        if number < self.minimum or number > self.maximum:
            return self.fail(
                f"{context.member_name} must be between {_format_bound(self.minimum)} and {_format_bound(self.maximum)} "
                f"when {self.dependent_field} is {self.dependent_value}."
            )
        return SUCCESS


@register_rule("required_if")
class RequiredIf(Rule):
    """Target is required when a sibling equals ``target_value``."""

    def __init__(self, dependent_field: str, target_value: Any):
        self.dependent_field = require_field_name(dependent_field, "dependent_field", self.kind)
        self.target_value = target_value

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.dependent_field)
        if current is MISSING:
            return unknown_property(self.dependent_field)
        if current == self.target_value and is_blank(value):
            return self.fail(f"{context.member_name} is required when {self.dependent_field} is '{self.target_value}'")
        return SUCCESS


@register_rule("required_if_true")
class RequiredIfTrue(Rule):
    """Target is required when a boolean sibling is True."""

    def __init__(self, dependent_field: str):
        self.dependent_field = require_field_name(dependent_field, "dependent_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.dependent_field)
        if current is MISSING:
            return Failure(f"Property '{self.dependent_field}' not found.")
        if current is True and is_blank(value):
            return self.fail(f"{context.display_name} is required when {self.dependent_field} is true.")
        return SUCCESS


@register_rule("required_if_false")
class RequiredIfFalse(Rule):
    """Target is required when a boolean sibling is False.

    A None sibling skips validation; any other non-boolean sibling fails.
    """

    def __init__(self, boolean_field: str):
        self.boolean_field = require_field_name(boolean_field, "boolean_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.boolean_field)
        if current is MISSING:
            return unknown_property(self.boolean_field)
        if current is None:
            return SUCCESS
        if not isinstance(current, bool):
            return Failure(f"{self.boolean_field} is not a boolean property.")
        if current is False and is_blank(value):
            return self.fail(f"{context.member_name} is required because {self.boolean_field} is false.")
        return SUCCESS


@register_rule("required_if_in_set")
class RequiredIfInSet(Rule):
    """Target is required when a sibling's value is one of ``target_values``."""

    def __init__(self, other_field: str, *target_values: Any):
        self.other_field = require_field_name(other_field, "other_field", self.kind)
        if not target_values:
            raise ConfigurationError("at least one target value is required", self.kind)
        self.condition = InSet(*target_values)

    @property
    def target_values(self) -> tuple:
        return self.condition.values

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.other_field)
        if current is MISSING:
            return unknown_property(self.other_field)
        if self.condition.matches(current) and is_blank(value):
            return self.fail(f"{context.display_name} is required.")
        return SUCCESS


@register_rule("required_if_not_null_or_whitespace")
class RequiredIfNotNullOrWhiteSpace(Rule):
    """Target is required when a sibling is not None."""

    def __init__(self, dependent_field: str):
        self.dependent_field = require_field_name(dependent_field, "dependent_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.dependent_field)
        if current is MISSING:
            return Failure(f"Property '{self.dependent_field}' not found.")
        if current is not None and is_blank(value):
            return self.fail(f"{context.display_name} is required when {self.dependent_field} is not null.")
        return SUCCESS


@register_rule("required_if_null_or_whitespace")
class RequiredIfNullOrWhiteSpace(Rule):
    """Target is required when a sibling is None or a whitespace-only string."""

    def __init__(self, dependent_field: str):
        self.dependent_field = require_field_name(dependent_field, "dependent_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        current = context.lookup(self.dependent_field)
        if current is MISSING:
            return unknown_property(self.dependent_field)
        if is_blank(current) and is_blank(value):
            return self.fail(f"{context.display_name} is required because {self.dependent_field} is null or empty.")
        return SUCCESS
