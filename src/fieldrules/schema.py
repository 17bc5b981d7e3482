"""Record metadata: which rules are attached to which fields.

A ``RecordSchema`` is the host-side description of a record type. It lists
fields in declaration order with their rules in attachment order, their
display names, record-level rules, and named predicates. Schemas can be
built by hand or discovered from ``typing.Annotated`` field annotations:

    @dataclass
    class Order:
        items: Annotated[list[str] | None, ListCountMax(3)] = None
        status: str = "Active"
        name: Annotated[str | None, RequiredIf("status", "Active"), DisplayName("Name")] = None

    schema = RecordSchema.from_model(Order)
"""

import logging
import typing
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, get_args, get_origin

from .context import DEFAULT_ACCESSOR, FieldAccessor, Predicate, ValidationContext
from .errors import ConfigurationError, UnknownFieldError
from .rules.base import Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DisplayName:
    """Annotation marker giving a field its human-readable label."""
    value: str


@dataclass
class FieldSpec:
    """A field and the rules attached to it."""
    name: str
    rules: list[Rule] = field(default_factory=list)
    display_name: str | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


class RecordSchema:
    """Ordered field/rule metadata for one record type."""

    def __init__(
        self,
        fields: Iterable[FieldSpec] | None = None,
        *,
        name: str | None = None,
        accessor: FieldAccessor | None = None,
        predicates: Mapping[str, Predicate] | None = None,
        record_rules: Iterable[Rule] | None = None,
    ):
        self.name = name
        self.accessor = accessor or DEFAULT_ACCESSOR
        self._fields: dict[str, FieldSpec] = {}
        self._predicates: dict[str, Predicate] = dict(predicates or {})
        self.record_rules: list[Rule] = []

        for spec in fields or []:
            self.add_field(spec.name, *spec.rules, display_name=spec.display_name)
        for rule in record_rules or []:
            self.add_record_rule(rule)

    def add_field(self, name: str, *rules: Rule, display_name: str | None = None) -> "RecordSchema":
        """Attach rules to a field, creating it on first use."""
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Field name must be a non-empty string, got: {name!r}")
        for rule in rules:
            if not isinstance(rule, Rule):
                raise ConfigurationError(f"Field '{name}' can only carry rules, got: {rule!r}")

        spec = self._fields.get(name)
        if spec is None:
            spec = FieldSpec(name=name, display_name=display_name)
            self._fields[name] = spec
        elif display_name:
            spec.display_name = display_name
        spec.rules.extend(rules)
        return self

    def add_record_rule(self, *rules: Rule) -> "RecordSchema":
        """Attach rules evaluated once against the whole record."""
        for rule in rules:
            if not isinstance(rule, Rule):
                raise ConfigurationError(f"Record rules must be rules, got: {rule!r}")
            self.record_rules.append(rule)
        return self

    def add_predicate(self, name: str, predicate: Predicate) -> "RecordSchema":
        """Register a named predicate taking ``(record, value)``."""
        if not callable(predicate):
            raise ConfigurationError(f"Predicate '{name}' must be callable")
        self._predicates[name] = predicate
        return self

    @property
    def predicates(self) -> Mapping[str, Predicate]:
        return self._predicates

    @property
    def fields(self) -> list[FieldSpec]:
        return list(self._fields.values())

    def enumerate_fields(self) -> list[str]:
        return list(self._fields)

    def get_field(self, name: str) -> FieldSpec:
        try:
            return self._fields[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def get_attached_rules(self, name: str) -> list[Rule]:
        return list(self.get_field(name).rules)

    def get_display_name(self, name: str) -> str:
        spec = self._fields.get(name)
        return spec.label if spec else name

    def context_for(self, record: Any, name: str) -> ValidationContext:
        """Build the per-call context for one field of ``record``."""
        return ValidationContext(
            record=record,
            member_name=name,
            display_name=self.get_display_name(name),
            accessor=self.accessor,
            predicates=self._predicates,
        )

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        rule_count = sum(len(spec.rules) for spec in self._fields.values())
        return f"<RecordSchema {self.name or ''} fields={len(self._fields)} rules={rule_count}>"

    @classmethod
    def from_model(
        cls,
        model: type,
        *,
        accessor: FieldAccessor | None = None,
        predicates: Mapping[str, Predicate] | None = None,
        record_rules: Iterable[Rule] | None = None,
    ) -> "RecordSchema":
        """Discover rules declared with ``Annotated`` on a class' annotations.

        Works for dataclasses, pydantic models and plain annotated classes.
        Only annotated fields become schema fields; ``Rule`` instances in the
        metadata are attached in order and a ``DisplayName`` sets the label
        (a pydantic ``Field(title=...)`` is used when there is none).
        """
        schema = cls(
            name=model.__name__,
            accessor=accessor,
            predicates=predicates,
            record_rules=record_rules,
        )

        for field_name, metadata, title in _declared_fields(model):
            rules, display_name = _collect_metadata(metadata)
            schema.add_field(field_name, *rules, display_name=display_name or title)

        # Bound methods named as predicates resolve on the record itself
        for attr_name, attr in vars(model).items():
            marker = getattr(attr, "__fieldrules_predicate__", None)
            if marker:
                schema.add_predicate(marker, _method_predicate(attr_name))

        logger.debug(f"Discovered {schema!r} from {model.__qualname__}")
        return schema


def predicate(name: str | None = None):
    """Mark a method as a named predicate for ``RecordSchema.from_model``."""
    def decorator(func):
        func.__fieldrules_predicate__ = name or func.__name__
        return func
    return decorator


def _method_predicate(attr_name: str) -> Predicate:
    def call(record: Any, value: Any) -> Any:
        return getattr(record, attr_name)(value)
    return call


def _declared_fields(model: type) -> Iterator[tuple[str, tuple, str | None]]:
    model_fields = getattr(model, "model_fields", None)
    if isinstance(model_fields, Mapping):
        # pydantic keeps unrecognised Annotated metadata on FieldInfo
        for name, info in model_fields.items():
            yield name, tuple(info.metadata), info.title
        return

    hints = typing.get_type_hints(model, include_extras=True)
    for name, hint in hints.items():
        if name.startswith("_") or get_origin(hint) is typing.ClassVar:
            continue
        metadata = get_args(hint)[1:] if get_origin(hint) is Annotated else ()
        yield name, metadata, None


def _collect_metadata(metadata: Iterable[Any]) -> tuple[list[Rule], str | None]:
    rules: list[Rule] = []
    display_name = None
    for item in metadata:
        if isinstance(item, Rule):
            rules.append(item)
        elif isinstance(item, DisplayName):
            display_name = item.value
    return rules, display_name
