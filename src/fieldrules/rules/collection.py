"""Collection rules: item counts, uniqueness, per-item validation."""

import logging
from typing import Any

from ..context import ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Outcome
from .base import (
    CheckRule,
    Rule,
    is_collection,
    is_enumerable,
    not_a_collection,
    require_non_negative,
)
from .registry import RuleFactory, build_rule, register_rule

logger = logging.getLogger(__name__)


@register_rule("list_count_max")
class ListCountMax(Rule):
    """Collection must contain at most ``max_count`` items."""

    def __init__(self, max_count: int):
        self.max_count = require_non_negative(max_count, "max_count", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not is_collection(value):
            return not_a_collection(context)
        if len(value) > self.max_count:
            return self.fail(f"{context.display_name} must contain at most {self.max_count} item(s).")
        return SUCCESS


@register_rule("list_count_min")
class ListCountMin(Rule):
    """Collection must contain at least ``min_count`` items."""

    def __init__(self, min_count: int):
        self.min_count = require_non_negative(min_count, "min_count", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not is_collection(value):
            return not_a_collection(context)
        if len(value) < self.min_count:
            return self.fail(f"{context.display_name} must contain at least {self.min_count} item(s).")
        return SUCCESS


@register_rule("list_count_range")
class ListCountRange(Rule):
    """Collection size must lie in ``[min_count, max_count]``, both inclusive."""

    def __init__(self, min_count: int, max_count: int):
        self.min_count = require_non_negative(min_count, "min_count", self.kind)
        self.max_count = require_non_negative(max_count, "max_count", self.kind)
        if self.min_count > self.max_count:
            raise ConfigurationError("min_count cannot be greater than max_count", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not is_collection(value):
            return not_a_collection(context)
        if not self.min_count <= len(value) <= self.max_count:
            return self.fail(
                f"{context.display_name} must contain between {self.min_count} and {self.max_count} items."
            )
        return SUCCESS


@register_rule("list_items_unique")
class ListItemsUnique(Rule):
    """No two non-null items may be equal. None items are ignored."""

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not is_enumerable(value):
            return not_a_collection(context)

        seen_hashable: set = set()
        seen_unhashable: list = []
        for item in value:
            if item is None:
                continue
            try:
                if item in seen_hashable:
                    return self._duplicate(context)
                seen_hashable.add(item)
            except TypeError:
                # Unhashable items (lists, dicts) fall back to equality scan
                if item in seen_unhashable:
                    return self._duplicate(context)
                seen_unhashable.append(item)
        return SUCCESS

    def _duplicate(self, context: ValidationContext) -> Outcome:
        return self.fail(f"{context.display_name} contains duplicate items.")


@register_rule("list_items_condition")
class ListItemsCondition(Rule):
    """Apply an inner rule to every item, stopping at the first failure.

    The inner rule is built once from ``item_rule`` and ``args``; each item is
    evaluated with a context whose record is the item itself.
    """

    def __init__(self, item_rule: RuleFactory, *args: Any, **kwargs: Any):
        if item_rule is None:
            raise ConfigurationError("item_rule is required", self.kind)
        self.item_rule = build_rule(item_rule, *args, **kwargs)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not is_enumerable(value):
            return not_a_collection(context)

        for index, item in enumerate(value):
            outcome = self.item_rule.evaluate(item, context.for_item(item, index))
            if not outcome.ok:
                logger.debug(f"{context.member_name}[{index}] failed {self.item_rule.kind}")
                return self.fail(f"{context.display_name}[{index}]: {outcome.message}")
        return SUCCESS


@register_rule("required_list")
class RequiredList(CheckRule):
    """Value must be a collection with at least one item."""

    def is_valid(self, value: Any) -> bool:
        if value is None or not is_enumerable(value):
            return False
        for _ in value:
            return True
        return False
