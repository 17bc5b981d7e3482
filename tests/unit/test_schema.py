"""Unit tests for record schemas and annotation discovery."""

from dataclasses import dataclass
from typing import Annotated, ClassVar

import pytest
from pydantic import BaseModel, Field

from fieldrules.context import MappingAccessor
from fieldrules.errors import ConfigurationError, UnknownFieldError
from fieldrules.rules import (
    AtLeastOneRequired,
    ListCountMax,
    PredicateValidation,
    RequiredIf,
    RequiredString,
)
from fieldrules.schema import DisplayName, FieldSpec, RecordSchema, predicate


@dataclass
class Order:
    items: Annotated[list[str] | None, ListCountMax(3)] = None
    status: str = "Active"
    name: Annotated[str | None, RequiredIf("status", "Active"), DisplayName("Customer name")] = None
    total: Annotated[int | None, PredicateValidation("positive")] = None
    registry: ClassVar[dict] = {}
    _cache: dict | None = None

    @predicate("positive")
    def is_positive(self, value):
        return value is None or value > 0


class Customer(BaseModel):
    email: Annotated[str | None, RequiredString()] = None
    phone: Annotated[str | None, Field(title="Phone number")] = None


class TestRecordSchema:
    """Test hand-built schemas."""

    def test_fields_in_declaration_order(self):
        schema = RecordSchema()
        schema.add_field("b", RequiredString())
        schema.add_field("a")
        schema.add_field("c", ListCountMax(1), display_name="Items")

        assert schema.enumerate_fields() == ["b", "a", "c"]
        assert len(schema) == 3
        assert "a" in schema
        assert "z" not in schema

    def test_rules_in_attachment_order(self):
        first, second, third = RequiredString(), ListCountMax(1), ListCountMax(2)
        schema = RecordSchema()
        schema.add_field("x", first, second)
        schema.add_field("x", third)
        assert schema.get_attached_rules("x") == [first, second, third]

    def test_attached_rules_returns_copy(self):
        schema = RecordSchema().add_field("x", RequiredString())
        schema.get_attached_rules("x").clear()
        assert len(schema.get_attached_rules("x")) == 1

    def test_display_name(self):
        schema = RecordSchema(fields=[FieldSpec("x", display_name="Ex")])
        assert schema.get_display_name("x") == "Ex"
        assert schema.get_display_name("undeclared") == "undeclared"

    def test_unknown_field(self):
        with pytest.raises(UnknownFieldError):
            RecordSchema().get_attached_rules("missing")

    def test_only_rules_can_be_attached(self):
        with pytest.raises(ConfigurationError):
            RecordSchema().add_field("x", "required_string")
        with pytest.raises(ConfigurationError):
            RecordSchema().add_record_rule(object())

    def test_invalid_field_name(self):
        with pytest.raises(ConfigurationError):
            RecordSchema().add_field("")

    def test_context_for(self):
        schema = RecordSchema(accessor=MappingAccessor()).add_field("x", display_name="Ex")
        schema.add_predicate("p", lambda record, value: True)
        context = schema.context_for({"x": 1}, "x")

        assert context.display_name == "Ex"
        assert context.lookup("x") == 1
        assert context.invoke_predicate("p", 1) is True

    def test_predicate_must_be_callable(self):
        with pytest.raises(ConfigurationError):
            RecordSchema().add_predicate("p", "not callable")


class TestFromModel:
    """Test schema discovery from annotations."""

    def test_dataclass_fields(self):
        schema = RecordSchema.from_model(Order)
        assert schema.name == "Order"
        assert schema.enumerate_fields() == ["items", "status", "name", "total"]
        assert [rule.kind for rule in schema.get_attached_rules("items")] == ["list_count_max"]
        assert schema.get_attached_rules("status") == []

    def test_display_name_marker(self):
        schema = RecordSchema.from_model(Order)
        assert schema.get_display_name("name") == "Customer name"
        assert schema.get_display_name("items") == "items"

    def test_predicate_methods_registered(self):
        schema = RecordSchema.from_model(Order)
        assert "positive" in schema.predicates

        context = schema.context_for(Order(total=-1), "total")
        assert context.invoke_predicate("positive", -1) is False

    def test_pydantic_model(self):
        schema = RecordSchema.from_model(Customer)
        assert schema.enumerate_fields() == ["email", "phone"]
        assert [rule.kind for rule in schema.get_attached_rules("email")] == ["required_string"]
        assert schema.get_display_name("phone") == "Phone number"

    def test_record_rules(self):
        rule = AtLeastOneRequired("email", "phone")
        schema = RecordSchema.from_model(Customer, record_rules=[rule])
        assert schema.record_rules == [rule]
