"""Shared fixtures for fieldrules tests."""

from types import SimpleNamespace

import pytest

from fieldrules.context import ValidationContext


def run_rule(rule, record, field_name, display_name=""):
    """Evaluate ``rule`` against the live value of ``field_name`` on ``record``."""
    context = ValidationContext(record=record, member_name=field_name, display_name=display_name)
    return rule.evaluate(context.lookup(field_name), context)


@pytest.fixture
def evaluate():
    """Evaluate a rule against one field of a record."""
    return run_rule


@pytest.fixture
def make_record():
    """Build an attribute-style record from keyword arguments."""
    def factory(**fields):
        return SimpleNamespace(**fields)
    return factory
