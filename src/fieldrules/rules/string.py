"""String shape rules."""

import re
from typing import Any

from ..context import ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Failure, Outcome
from .base import CheckRule, Rule, require_non_negative
from .registry import register_rule

ULID_PATTERN = re.compile(r"^[0123456789ABCDEFGHJKMNPQRSTVWXYZ]{26}$")


def _require_substring(substring: Any, rule: str) -> str:
    if not isinstance(substring, str):
        raise ConfigurationError(f"substring must be a string, got: {substring!r}", rule)
    return substring


@register_rule("string_contains")
class StringContains(CheckRule):
    """String must contain ``substring``."""

    def __init__(self, substring: str):
        self.substring = _require_substring(substring, self.kind)

    def is_valid(self, value: Any) -> bool:
        return value is None or (isinstance(value, str) and self.substring in value)


@register_rule("string_not_contains")
class StringNotContains(CheckRule):
    """String must not contain ``substring``."""

    def __init__(self, substring: str):
        self.substring = _require_substring(substring, self.kind)

    def is_valid(self, value: Any) -> bool:
        return value is None or (isinstance(value, str) and self.substring not in value)


@register_rule("string_length_equals")
class StringLengthEquals(Rule):
    """String must be exactly ``length`` characters long."""

    def __init__(self, length: int):
        self.length = require_non_negative(length, "length", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not isinstance(value, str):
            return Failure("The value is not a string.")
        if len(value) == self.length:
            return SUCCESS
        return self.fail(f"The field {context.display_name} must be exactly {self.length} characters long.")


@register_rule("ulid")
class Ulid(CheckRule):
    """String must be a canonical ULID: 26 upper-case Crockford base32 characters."""

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, str) or not value.strip():
            return False
        return ULID_PATTERN.match(value) is not None
