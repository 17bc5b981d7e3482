"""Cardinality rules spanning several fields of one record."""

from .base import MultiFieldRule
from .registry import register_rule


@register_rule("at_least_one_required")
class AtLeastOneRequired(MultiFieldRule):
    """At least one of the named fields must be filled."""

    default_message = "At least one field must be filled."

    def accepts(self, filled: int) -> bool:
        return filled >= 1


@register_rule("mutually_exclusive")
class MutuallyExclusive(MultiFieldRule):
    """At most one of the named fields may be filled."""

    default_message = "Fields are mutually exclusive."

    def accepts(self, filled: int) -> bool:
        return filled <= 1


@register_rule("only_one_required")
class OnlyOneRequired(MultiFieldRule):
    """Exactly one of the named fields must be filled."""

    default_message = "Exactly one field must be filled."

    def accepts(self, filled: int) -> bool:
        return filled == 1
