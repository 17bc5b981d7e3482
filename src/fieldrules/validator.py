"""Whole-record validation.

The validator walks the fields of a ``RecordSchema`` in declaration order,
evaluates each attached rule in attachment order, then evaluates the
record-level rules, collecting failures into a ``ValidationReport``.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .context import MISSING, ValidationContext
from .errors import RecordValidationError
from .outcome import Failure, Outcome
from .rules.base import MultiFieldRule, Rule, unknown_property
from .schema import RecordSchema

if TYPE_CHECKING:
    from .config import ValidationConfig

logger = logging.getLogger(__name__)

RECORD_FIELD = "__record__"


class ValidationMode(str, Enum):
    """How far a validation pass goes after a failure."""
    COLLECT_ALL = "collect_all"
    FIRST_PER_FIELD = "first_per_field"
    FIRST_FAILURE = "first_failure"


@dataclass(frozen=True)
class FieldFailure:
    """A single failed rule on a field."""
    field: str
    message: str
    rule: str

    def __str__(self) -> str:
        if self.field == RECORD_FIELD:
            return self.message
        return f"{self.field}: {self.message}"


@dataclass
class ValidationReport:
    """Results of one validation pass over a record."""
    failures: list[FieldFailure] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)
    stopped_early: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = valid, 1 = invalid."""
        return 0 if self.is_valid else 1

    def add_failure(self, field_name: str, message: str, rule: str) -> None:
        self.failures.append(FieldFailure(field_name, message, rule))
        self.increment_counter("rules_failed")

    def increment_counter(self, name: str, value: int = 1) -> None:
        self.counters[name] = self.counters.get(name, 0) + value

    def pairs(self) -> list[tuple[str, str]]:
        """Failures as ``(field, message)`` pairs."""
        return [(failure.field, failure.message) for failure in self.failures]

    def by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.field, []).append(failure.message)
        return grouped

    def messages(self) -> list[str]:
        return [failure.message for failure in self.failures]

    def __iter__(self) -> Iterator[FieldFailure]:
        return iter(self.failures)

    def __len__(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.is_valid,
            "exit_code": self.exit_code,
            "stopped_early": self.stopped_early,
            "counters": self.counters,
            "failures": [
                {
                    "field": failure.field,
                    "message": failure.message,
                    "rule": failure.rule,
                }
                for failure in self.failures
            ],
        }


class _StopPass(Exception):
    """Internal signal ending a first-failure pass."""


class Validator:
    """Runs every rule of a schema against record instances."""

    def __init__(
        self,
        schema: RecordSchema,
        mode: ValidationMode | str | None = None,
        config: "ValidationConfig | None" = None,
    ):
        self.schema = schema
        self.catch_rule_errors = config.catch_rule_errors if config else True
        if mode is None:
            mode = config.mode if config else ValidationMode.COLLECT_ALL
        self.mode = ValidationMode(mode)

    def validate(self, record: Any) -> ValidationReport:
        """Validate every field of ``record``.

        Args:
            record: Record instance to validate

        Returns:
            ValidationReport with failures in field, then rule, order
        """
        report = ValidationReport()
        seen_multi: set[int] = set()
        field_names = self.schema.enumerate_fields()

        logger.info(f"Validating {type(record).__name__} against {self.schema!r} in {self.mode.value} mode")

        try:
            for name in field_names:
                self._validate_field(record, name, report, seen_multi)
            self._validate_record_rules(record, report, seen_multi)
        except _StopPass:
            report.stopped_early = True

        logger.info(f"Validation finished with {len(report.failures)} failure(s)")
        return report

    def validate_field(self, record: Any, name: str) -> ValidationReport:
        """Validate a single field of ``record``."""
        report = ValidationReport()
        try:
            self._validate_field(record, name, report, set())
        except _StopPass:
            report.stopped_early = True
        return report

    def check(self, record: Any) -> ValidationReport:
        """Validate and raise ``RecordValidationError`` if the record is invalid."""
        report = self.validate(record)
        if not report.is_valid:
            raise RecordValidationError(report)
        return report

    def is_valid(self, record: Any) -> bool:
        return self.validate(record).is_valid

    def _validate_field(self, record: Any, name: str, report: ValidationReport, seen_multi: set[int]) -> None:
        rules = self.schema.get_attached_rules(name)
        report.increment_counter("fields_checked")
        if not rules:
            return

        context = self.schema.context_for(record, name)
        value = context.lookup(name)
        if value is MISSING:
            # Declared field absent from the record: report once for the field
            self._record(report, name, unknown_property(name).message, "field_lookup")
            return

        for rule in rules:
            if not self._first_evaluation(rule, seen_multi):
                continue
            outcome = self._evaluate(rule, value, context, report)
            if not outcome.ok:
                self._record(report, name, outcome.message, rule.name)
                if self.mode == ValidationMode.FIRST_PER_FIELD:
                    return

    def _validate_record_rules(self, record: Any, report: ValidationReport, seen_multi: set[int]) -> None:
        if not self.schema.record_rules:
            return
        context = ValidationContext(
            record=record,
            member_name=RECORD_FIELD,
            display_name=self.schema.name or type(record).__name__,
            accessor=self.schema.accessor,
            predicates=self.schema.predicates,
        )
        for rule in self.schema.record_rules:
            if not self._first_evaluation(rule, seen_multi):
                continue
            outcome = self._evaluate(rule, record, context, report)
            if not outcome.ok:
                self._record(report, RECORD_FIELD, outcome.message, rule.name)

    def _first_evaluation(self, rule: Rule, seen_multi: set[int]) -> bool:
        """Multi-field rules run at most once per pass."""
        if not isinstance(rule, MultiFieldRule):
            return True
        if id(rule) in seen_multi:
            logger.debug(f"Skipping repeated {rule.name} in this pass")
            return False
        seen_multi.add(id(rule))
        return True

    def _evaluate(self, rule: Rule, value: Any, context: ValidationContext, report: ValidationReport) -> Outcome:
        logger.debug(f"Executing rule {rule.name} on {context.member_name}")
        report.increment_counter("rules_evaluated")
        try:
            return rule.evaluate(value, context)
        except Exception as e:
            if not self.catch_rule_errors:
                raise
            logger.error(f"Rule {rule.name} failed with error: {e}")
            return Failure(f"Rule {rule.name} failed with error: {e}")

    def _record(self, report: ValidationReport, field_name: str, message: str, rule: str) -> None:
        report.add_failure(field_name, message, rule)
        if self.mode == ValidationMode.FIRST_FAILURE:
            raise _StopPass()
