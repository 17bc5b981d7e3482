"""Unit tests for field accessors and the validation context."""

from dataclasses import dataclass

import pytest

from fieldrules.context import (
    ACCESSORS,
    MISSING,
    AttributeAccessor,
    AutoAccessor,
    FieldAccessor,
    MappingAccessor,
    ValidationContext,
)
from fieldrules.errors import UnknownFieldError


@dataclass
class Person:
    name: str | None = None
    age: int | None = None

    def is_adult(self, value):
        return value >= 18


class TestAccessors:
    """Test record accessors."""

    def test_accessors_satisfy_protocol(self):
        for accessor in ACCESSORS.values():
            assert isinstance(accessor, FieldAccessor)

    def test_attribute_accessor(self):
        accessor = AttributeAccessor()
        assert accessor.get_value(Person(name="Ann"), "name") == "Ann"
        with pytest.raises(UnknownFieldError):
            accessor.get_value(Person(), "email")

    def test_attribute_accessor_hides_dunders(self):
        with pytest.raises(UnknownFieldError):
            AttributeAccessor().get_value(Person(), "__class__")

    def test_attribute_accessor_null_record(self):
        with pytest.raises(UnknownFieldError):
            AttributeAccessor().get_value(None, "name")

    def test_mapping_accessor(self):
        accessor = MappingAccessor()
        assert accessor.get_value({"name": None}, "name") is None
        with pytest.raises(UnknownFieldError):
            accessor.get_value({"name": None}, "age")
        with pytest.raises(UnknownFieldError):
            accessor.get_value(Person(), "name")

    def test_mapping_has_no_predicates(self):
        assert MappingAccessor().get_predicate({"is_adult": lambda v: True}, "is_adult") is None

    def test_auto_accessor_dispatch(self):
        accessor = AutoAccessor()
        assert accessor.get_value({"name": "Map"}, "name") == "Map"
        assert accessor.get_value(Person(name="Obj"), "name") == "Obj"
        assert accessor.get_predicate(Person(), "is_adult")(20) is True


class TestValidationContext:
    """Test ValidationContext."""

    def test_display_name_defaults_to_member(self):
        context = ValidationContext(record=Person(), member_name="name")
        assert context.display_name == "name"

    def test_context_is_frozen(self):
        context = ValidationContext(record=Person(), member_name="name")
        with pytest.raises(AttributeError):
            context.member_name = "age"

    def test_lookup_reads_live_values(self):
        person = Person(age=10)
        context = ValidationContext(record=person, member_name="name")
        assert context.lookup("age") == 10
        person.age = 30
        assert context.lookup("age") == 30

    def test_lookup_missing_is_distinct_from_none(self):
        context = ValidationContext(record=Person(), member_name="name")
        assert context.lookup("name") is None
        assert context.lookup("email") is MISSING
        assert not MISSING

    def test_invoke_predicate(self):
        context = ValidationContext(record=Person(), member_name="age")
        assert context.invoke_predicate("is_adult", 17) is False
        assert context.invoke_predicate("is_teen", 17) is MISSING

    def test_schema_predicates_take_record(self):
        person = Person(age=5)
        seen = []
        context = ValidationContext(
            record=person,
            member_name="age",
            predicates={"check": lambda record, value: seen.append((record, value)) or True},
        )
        assert context.invoke_predicate("check", 5) is True
        assert seen == [(person, 5)]

    def test_for_item(self):
        context = ValidationContext(record=Person(), member_name="Tags", display_name="Tag list")
        item_context = context.for_item({"code": "x"}, 2)

        assert item_context.record == {"code": "x"}
        assert item_context.member_name == "Tags[2]"
        assert item_context.display_name == "item"
        assert item_context.lookup("code") == "x"
