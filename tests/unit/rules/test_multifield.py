"""Tests for multi-field cardinality rules."""

import pytest

from fieldrules.errors import ConfigurationError
from fieldrules.outcome import SUCCESS
from fieldrules.rules import AtLeastOneRequired, MutuallyExclusive, OnlyOneRequired


@pytest.fixture
def contact(make_record):
    def factory(email=None, phone=None, fax=None):
        return make_record(Email=email, Phone=phone, Fax=fax)
    return factory


class TestAtLeastOneRequired:
    """Test AtLeastOneRequired rule."""

    def test_none_filled(self, evaluate, contact):
        result = evaluate(AtLeastOneRequired("Email", "Phone"), contact(), "Email")
        assert result.message == "At least one field must be filled."

    def test_whitespace_is_not_filled(self, evaluate, contact):
        assert evaluate(AtLeastOneRequired("Email", "Phone"), contact(email="  "), "Email").ok is False

    def test_one_filled(self, evaluate, contact):
        assert evaluate(AtLeastOneRequired("Email", "Phone"), contact(phone="555"), "Email") is SUCCESS

    def test_value_argument_is_ignored(self, make_record):
        from fieldrules.context import ValidationContext

        record = make_record(Email="a@b", Phone=None)
        context = ValidationContext(record=record, member_name="Phone")
        assert AtLeastOneRequired("Email", "Phone").evaluate(None, context) is SUCCESS

    def test_unknown_names_count_as_empty(self, evaluate, contact):
        assert evaluate(AtLeastOneRequired("Nope"), contact(email="x"), "Email").ok is False

    def test_non_string_values_count_as_filled(self, evaluate, make_record):
        record = make_record(Count=0, Flag=False)
        assert evaluate(AtLeastOneRequired("Count"), record, "Count") is SUCCESS

    def test_field_names_required(self):
        with pytest.raises(ConfigurationError):
            AtLeastOneRequired()


class TestMutuallyExclusive:
    """Test MutuallyExclusive rule."""

    @pytest.mark.parametrize("filled, ok", [(0, True), (1, True), (2, False), (3, False)])
    def test_counts(self, evaluate, contact, filled, ok):
        values = ["x"] * filled + [None] * (3 - filled)
        record = contact(*values)
        assert evaluate(MutuallyExclusive("Email", "Phone", "Fax"), record, "Email").ok is ok

    def test_message(self, evaluate, contact):
        result = evaluate(MutuallyExclusive("Email", "Phone"), contact("a", "b"), "Email")
        assert result.message == "Fields are mutually exclusive."


class TestOnlyOneRequired:
    """Test OnlyOneRequired rule."""

    @pytest.mark.parametrize("filled, ok", [(0, False), (1, True), (2, False)])
    def test_counts(self, evaluate, contact, filled, ok):
        values = ["x"] * filled + [None] * (3 - filled)
        assert evaluate(OnlyOneRequired("Email", "Phone", "Fax"), contact(*values), "Email").ok is ok

    def test_message(self, evaluate, contact):
        result = evaluate(OnlyOneRequired("Email", "Phone"), contact(), "Email")
        assert result.message == "Exactly one field must be filled."

    def test_custom_message(self, evaluate, contact):
        rule = OnlyOneRequired("Email", "Phone").with_message("Pick one contact method")
        assert evaluate(rule, contact("a", "b"), "Email").message == "Pick one contact method"
