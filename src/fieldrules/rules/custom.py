"""Delegation to a host-supplied predicate."""

import logging
from collections.abc import Callable
from typing import Any

from ..context import MISSING, ValidationContext
from ..errors import ConfigurationError
from ..outcome import SUCCESS, Failure, Outcome
from .base import Rule
from .registry import register_rule

logger = logging.getLogger(__name__)


@register_rule("predicate")
class PredicateValidation(Rule):
    """Pass when a predicate returns exactly ``True`` for the value.

    ``predicate`` is either a callable taking ``(record, value)`` or the name
    of a predicate registered on the schema (or a method on the record taking
    ``(value)``), resolved at evaluation time.
    """

    def __init__(self, predicate: str | Callable[[Any, Any], Any]):
        if isinstance(predicate, str):
            if not predicate:
                raise ConfigurationError("predicate name cannot be empty", self.kind)
            self.predicate_name = predicate
            self.predicate = None
        elif callable(predicate):
            self.predicate_name = getattr(predicate, "__name__", repr(predicate))
            self.predicate = predicate
        else:
            raise ConfigurationError(f"predicate must be a name or callable, got: {predicate!r}", self.kind)

    def evaluate(self, value: Any, context: ValidationContext) -> Outcome:
        if self.predicate is not None:
            result = self.predicate(context.record, value)
        else:
            result = context.invoke_predicate(self.predicate_name, value)
            if result is MISSING:
                return Failure(f"Method '{self.predicate_name}' not found.")

        if result is True:
            return SUCCESS
        if not isinstance(result, bool):
            logger.debug(f"Predicate {self.predicate_name} returned non-boolean {type(result).__name__}")
        return self.fail("Predicate validation failed.")
