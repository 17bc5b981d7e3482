"""Exception types raised by fieldrules.

Constraint violations are never raised from rules; they are returned as
``Failure`` outcomes. Exceptions are reserved for misuse detected while
building rules and for callers that opt into raising on invalid records.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .validator import ValidationReport


class ConfigurationError(ValueError):
    """Raised when a rule is constructed with invalid parameters."""

    def __init__(self, message: str, rule: str | None = None):
        self.rule = rule
        super().__init__(f"{rule}: {message}" if rule else message)


class UnknownFieldError(LookupError):
    """Raised by a field accessor when a record has no field of that name."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Unknown property: {field_name}")


class RecordValidationError(Exception):
    """Raised by ``Validator.check`` when a record fails validation."""

    def __init__(self, report: "ValidationReport"):
        self.report = report
        self.violations = [str(failure) for failure in report.failures]
        count = len(self.violations)
        super().__init__(f"Record failed validation with {count} error(s): " + "; ".join(self.violations))
