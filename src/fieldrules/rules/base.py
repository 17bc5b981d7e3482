"""Base rule contract shared by every rule family.

Each rule validates a single field value, optionally reading sibling fields
through the ``ValidationContext``. Rules are immutable after construction
(apart from a one-time error message override) and keep no per-call state,
so one instance can be evaluated against many records.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable
from typing import Any

from ..context import MISSING, ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Failure, Outcome

logger = logging.getLogger(__name__)

_TEXT_TYPES = (str, bytes, bytearray)


def is_blank(value: Any) -> bool:
    """None or a whitespace-only string."""
    return value is None or (isinstance(value, str) and not value.strip())


def is_collection(value: Any) -> bool:
    """Sized collection that is not text."""
    return isinstance(value, Collection) and not isinstance(value, _TEXT_TYPES)


def is_enumerable(value: Any) -> bool:
    """Iterable that is not text."""
    return isinstance(value, Iterable) and not isinstance(value, _TEXT_TYPES)


def unknown_property(field_name: str) -> Failure:
    return Failure(f"Unknown property: {field_name}")


def not_a_collection(context: ValidationContext) -> Failure:
    return Failure(f"{context.display_name} is not a valid collection.")


def require_field_name(field_name: Any, parameter: str, rule: str) -> str:
    """Check a sibling field name parameter at construction time."""
    if not isinstance(field_name, str) or not field_name:
        raise ConfigurationError(f"{parameter} must be a non-empty field name, got: {field_name!r}", rule)
    return field_name


def require_non_negative(count: Any, parameter: str, rule: str) -> int:
    """Check a count parameter at construction time."""
    if isinstance(count, bool) or not isinstance(count, int):
        raise ConfigurationError(f"{parameter} must be an integer, got: {count!r}", rule)
    if count < 0:
        raise ConfigurationError(f"{parameter} cannot be negative", rule)
    return count


class Rule(ABC):
    """Base class for validation rules."""

    kind: str = "rule"
    _error_message: str | None = None

    @property
    def name(self) -> str:
        """Rule name for identification."""
        return self.kind

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @error_message.setter
    def error_message(self, message: str) -> None:
        if self._error_message is not None:
            raise ConfigurationError("error message can only be set once", self.kind)
        if not isinstance(message, str) or not message:
            raise ConfigurationError("error message must be a non-empty string", self.kind)
        self._error_message = message

    def with_message(self, message: str) -> "Rule":
        """Override the default error message and return the rule."""
        self.error_message = message
        return self

    def fail(self, default: str) -> Failure:
        """Failure using the override when set, else ``default``."""
        return Failure(self._error_message or default)

    @abstractmethod
    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        """Evaluate the rule.

        Args:
            value: Current value of the target field, possibly None
            context: Record and field metadata for this call

        Returns:
            SUCCESS or a Failure with a message
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind!r}>"


class CheckRule(Rule):
    """Rule expressed as a plain boolean check on the value."""

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if self.is_valid(value):
            return SUCCESS
        return self.fail(f"The field {context.display_name} is invalid.")

    @abstractmethod
    def is_valid(self, value: Any) -> bool:
        pass


class MultiFieldRule(Rule):
    """Whole-record rule counting how many of several fields are filled.

    Attached to one nominated field (or to the record), it ignores the value
    it is handed and reads every named field itself. A field is filled when it
    is neither None nor a whitespace-only string; unknown names count as not
    filled.
    """

    default_message = "Fields are invalid."

    def __init__(self, *field_names: str):
        if not field_names:
            raise ConfigurationError("at least one field name is required", self.kind)
        self.field_names = tuple(
            require_field_name(name, "field_names", self.kind) for name in field_names
        )

    def count_filled(self, context: ValidationContext) -> int:
        filled = 0
        for name in self.field_names:
            current = context.lookup(name)
            if current is not MISSING and not is_blank(current):
                filled += 1
        return filled

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        filled = self.count_filled(context)
        if self.accepts(filled):
            return SUCCESS
        logger.debug(f"{self.kind}: {filled} of {self.field_names} filled")
        return self.fail(self.default_message)

    @abstractmethod
    def accepts(self, filled: int) -> bool:
        pass
