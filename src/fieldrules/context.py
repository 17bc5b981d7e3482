"""Field access and per-call validation context.

Rules never look up sibling fields themselves. They go through the
``ValidationContext`` they are handed, which delegates to a ``FieldAccessor``
supplied by the host. This keeps the rules independent of how records are
represented (objects, dataclasses, pydantic models, plain mappings).
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .errors import UnknownFieldError

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel for a field or predicate that could not be resolved."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

Predicate = Callable[[Any, Any], Any]


@runtime_checkable
class FieldAccessor(Protocol):
    """Capability the core needs to read records."""

    def get_value(self, record: Any, field_name: str) -> Any:
        """Return the live value of ``field_name`` or raise ``UnknownFieldError``."""
        ...

    def get_predicate(self, record: Any, name: str) -> Callable[[Any], Any] | None:
        """Return a callable taking the field value, or None if not found."""
        ...


class AttributeAccessor:
    """Reads fields as attributes (plain objects, dataclasses, pydantic models)."""

    def get_value(self, record: Any, field_name: str) -> Any:
        if record is None or field_name.startswith("__"):
            raise UnknownFieldError(field_name)
        try:
            return getattr(record, field_name)
        except AttributeError:
            raise UnknownFieldError(field_name) from None

    def get_predicate(self, record: Any, name: str) -> Callable[[Any], Any] | None:
        method = getattr(record, name, None)
        return method if callable(method) else None


class MappingAccessor:
    """Reads fields as keys of a mapping."""

    def get_value(self, record: Any, field_name: str) -> Any:
        if not isinstance(record, Mapping) or field_name not in record:
            raise UnknownFieldError(field_name)
        return record[field_name]

    def get_predicate(self, record: Any, name: str) -> Callable[[Any], Any] | None:
        # Mappings carry data only; predicates must come from the schema
        return None


class AutoAccessor:
    """Default accessor: mapping keys for mappings, attributes for everything else."""

    def __init__(self):
        self._mapping = MappingAccessor()
        self._attribute = AttributeAccessor()

    def _pick(self, record: Any) -> FieldAccessor:
        return self._mapping if isinstance(record, Mapping) else self._attribute

    def get_value(self, record: Any, field_name: str) -> Any:
        return self._pick(record).get_value(record, field_name)

    def get_predicate(self, record: Any, name: str) -> Callable[[Any], Any] | None:
        return self._pick(record).get_predicate(record, name)


DEFAULT_ACCESSOR = AutoAccessor()

ACCESSORS: dict[str, FieldAccessor] = {
    "auto": DEFAULT_ACCESSOR,
    "attribute": AttributeAccessor(),
    "mapping": MappingAccessor(),
}


@dataclass(frozen=True)
class ValidationContext:
    """Read-only view of the record and field a rule is evaluated against."""
    record: Any
    member_name: str
    display_name: str = ""
    accessor: FieldAccessor = DEFAULT_ACCESSOR
    predicates: Mapping[str, Predicate] = field(default_factory=dict)

    def __post_init__(self):
        if not self.display_name:
            object.__setattr__(self, "display_name", self.member_name)

    def lookup(self, field_name: str) -> Any:
        """Return the current value of a sibling field, or ``MISSING``."""
        try:
            return self.accessor.get_value(self.record, field_name)
        except UnknownFieldError:
            logger.debug(f"Field '{field_name}' not found on {type(self.record).__name__}")
            return MISSING

    def invoke_predicate(self, name: str, value: Any) -> Any:
        """Call a named predicate with the field value.

        Schema-registered predicates take ``(record, value)`` and win over
        callables found on the record, which take ``(value)``. Returns
        ``MISSING`` when neither exists; the raw return value otherwise.
        """
        if name in self.predicates:
            return self.predicates[name](self.record, value)
        method = self.accessor.get_predicate(self.record, name)
        if method is None:
            return MISSING
        return method(value)

    def for_item(self, item: Any, index: int) -> "ValidationContext":
        """Context for one element of a collection field."""
        return ValidationContext(
            record=item,
            member_name=f"{self.member_name}[{index}]",
            display_name="item",
            accessor=self.accessor,
            predicates=self.predicates,
        )
