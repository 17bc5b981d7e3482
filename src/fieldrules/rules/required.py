"""Presence rules. Unlike every other family, these treat None as invalid."""

import enum
import uuid
from typing import Any

from ..context import ValidationContext
from ..outcome import SUCCESS, Failure, Outcome
from .base import CheckRule, Rule
from .registry import register_rule

NIL_UUID = uuid.UUID(int=0)


@register_rule("required_string")
class RequiredString(Rule):
    """Value must be a string with at least one non-whitespace character."""

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if isinstance(value, str) and value.strip():
            return SUCCESS
        return self.fail(f"The field {context.display_name} is invalid.")


@register_rule("required_guid")
class RequiredGuid(Rule):
    """Value must be a UUID other than the nil UUID."""

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        default = f"The field {context.display_name} is invalid."
        if value is None:
            return self.fail(default)
        if not isinstance(value, uuid.UUID):
            return Failure(f"{context.display_name} must be a UUID.")
        if value == NIL_UUID:
            return self.fail(default)
        return SUCCESS


@register_rule("required_enum")
class RequiredEnum(CheckRule):
    """Value must be an enum member whose value is not the zero default."""

    def is_valid(self, value: Any) -> bool:
        if not isinstance(value, enum.Enum):
            return False
        return value.value != 0
