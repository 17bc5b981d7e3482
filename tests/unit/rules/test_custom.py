"""Tests for predicate delegation."""

import pytest

from fieldrules.context import MappingAccessor, ValidationContext
from fieldrules.errors import ConfigurationError
from fieldrules.outcome import SUCCESS
from fieldrules.rules import PredicateValidation


class Account:
    def __init__(self, balance, limit):
        self.balance = balance
        self.limit = limit

    def within_limit(self, value):
        return value <= self.limit


class TestPredicateValidation:
    """Test PredicateValidation rule."""

    def test_method_on_record(self, evaluate):
        rule = PredicateValidation("within_limit")
        assert evaluate(rule, Account(50, 100), "balance") is SUCCESS

    def test_method_returns_false(self, evaluate):
        result = evaluate(PredicateValidation("within_limit"), Account(150, 100), "balance")
        assert result.message == "Predicate validation failed."

    def test_missing_method(self, evaluate):
        result = evaluate(PredicateValidation("no_such_check"), Account(1, 2), "balance")
        assert result.message == "Method 'no_such_check' not found."

    def test_non_callable_attribute_is_not_a_predicate(self, evaluate):
        result = evaluate(PredicateValidation("limit"), Account(1, 2), "balance")
        assert result.message == "Method 'limit' not found."

    def test_callable_predicate(self, evaluate):
        rule = PredicateValidation(lambda record, value: value < record.limit)
        assert evaluate(rule, Account(1, 2), "balance") is SUCCESS
        assert evaluate(rule, Account(3, 2), "balance").ok is False

    @pytest.mark.parametrize("result", [1, "yes", None, [True]])
    def test_only_true_passes(self, evaluate, result):
        rule = PredicateValidation(lambda record, value: result)
        assert evaluate(rule, Account(1, 2), "balance").ok is False

    def test_schema_predicate_wins_over_method(self):
        record = Account(150, 100)
        context = ValidationContext(
            record=record,
            member_name="balance",
            predicates={"within_limit": lambda rec, value: True},
        )
        assert PredicateValidation("within_limit").evaluate(150, context) is SUCCESS

    def test_mapping_records_use_schema_predicates(self):
        record = {"age": 17}
        context = ValidationContext(
            record=record,
            member_name="age",
            accessor=MappingAccessor(),
            predicates={"adult": lambda rec, value: value >= 18},
        )
        assert PredicateValidation("adult").evaluate(17, context).ok is False
        assert PredicateValidation("missing").evaluate(17, context).message == "Method 'missing' not found."

    def test_custom_message(self, evaluate):
        rule = PredicateValidation("within_limit").with_message("Over the limit")
        assert evaluate(rule, Account(150, 100), "balance").message == "Over the limit"

    def test_invalid_predicate(self):
        with pytest.raises(ConfigurationError):
            PredicateValidation("")
        with pytest.raises(ConfigurationError):
            PredicateValidation(42)
