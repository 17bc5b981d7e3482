"""Date and datetime rules."""

from datetime import date, datetime, timedelta
from typing import Any

from ..context import MISSING, ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Failure, Outcome
from .base import CheckRule, Rule, require_field_name, unknown_property
from .registry import register_rule


def parse_date(text: Any, parameter: str, rule: str) -> datetime:
    """Parse an ISO 8601 date or datetime literal at construction time."""
    if isinstance(text, datetime):
        return text
    if isinstance(text, date):
        return datetime(text.year, text.month, text.day)
    if not isinstance(text, str):
        raise ConfigurationError(f"Invalid {parameter} format: {text!r}", rule)
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        raise ConfigurationError(f"Invalid {parameter} format: {text!r}", rule) from None


@register_rule("date_earlier_than")
class DateEarlierThan(Rule):
    """Target date must be strictly earlier than a sibling date."""

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

        mismatch = Failure(f"{context.display_name} and {self.other_field} must be comparable date types")
        if not isinstance(value, date) or not isinstance(other, date):
            return mismatch
        try:
            earlier = value < other
        except TypeError:
            return mismatch
        if earlier:
            return SUCCESS
        return self.fail(f"{context.display_name} must be earlier than {self.other_field}")


@register_rule("date_later_than")
class DateLaterThan(Rule):
    """Target date must be strictly later than a sibling date. None on either side passes."""

    def __init__(self, other_field: str):
        self.other_field = require_field_name(other_field, "other_field", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        other = context.lookup(self.other_field)
        if other is MISSING:
            return unknown_property(self.other_field)
        if value is None or other is None:
            return SUCCESS

        mismatch = Failure("Both properties must be of type date or datetime.")
        if not isinstance(value, date) or not isinstance(other, date):
            return mismatch
        try:
            later = value > other
        except TypeError:
            return mismatch
        if later:
            return SUCCESS
        return self.fail(f"{context.display_name} must be later than {self.other_field}.")


@register_rule("date_range")
class DateRange(Rule):
    """Target date must lie in ``[min_date, max_date]``, both inclusive.

    Bounds are ISO 8601 strings parsed once here. A plain ``date`` value is
    compared against the calendar dates of the bounds.
    """

    def __init__(self, min_date: str, max_date: str):
        self.min_date = parse_date(min_date, "min_date", self.kind)
        self.max_date = parse_date(max_date, "max_date", self.kind)
        try:
            ordered = self.min_date <= self.max_date
        except TypeError:
            raise ConfigurationError("min_date and max_date must both be naive or both be aware", self.kind) from None
        if not ordered:
            raise ConfigurationError("min_date must be less than or equal to max_date", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if value is None:
            return SUCCESS
        if not isinstance(value, date):
            return Failure("The field must be a valid date.")

        if isinstance(value, datetime):
            low, high = self.min_date, self.max_date
        else:
            low, high = self.min_date.date(), self.max_date.date()
        try:
            inside = low <= value <= high
        except TypeError:
            return Failure(f"{context.display_name} cannot be compared with the configured date range.")
        if inside:
            return SUCCESS
        return self.fail(
            f"{context.display_name or 'Date'} must be between "
            f"{self.min_date:%Y-%m-%d} and {self.max_date:%Y-%m-%d} (inclusive)."
        )


@register_rule("date_is_utc")
class DateIsUtc(CheckRule):
    """Datetime must be timezone-aware with a zero UTC offset."""

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        if not isinstance(value, datetime) or value.tzinfo is None:
            return False
        return value.utcoffset() == timedelta(0)
