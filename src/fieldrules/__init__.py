"""fieldrules - Declarative validation rules for structured records.

Attach rules to the fields of a record type (dataclass, pydantic model,
plain object or mapping) and run a validation pass to collect every
violation as ``(field, message)`` pairs.
"""

__version__ = "0.1.0"
__author__ = "rpapub"
__email__ = "contact@rpapub.dev"
__description__ = "Declarative validation rules for structured records"

from fieldrules.context import (
    AttributeAccessor,
    AutoAccessor,
    FieldAccessor,
    MappingAccessor,
    MISSING,
    ValidationContext,
)
from fieldrules.errors import ConfigurationError, RecordValidationError, UnknownFieldError
from fieldrules.outcome import SUCCESS, Failure, Outcome, Success, is_success
from fieldrules.schema import DisplayName, FieldSpec, RecordSchema, predicate
from fieldrules.validator import FieldFailure, ValidationMode, ValidationReport, Validator

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
    "AttributeAccessor",
    "AutoAccessor",
    "FieldAccessor",
    "MappingAccessor",
    "MISSING",
    "ValidationContext",
    "ConfigurationError",
    "RecordValidationError",
    "UnknownFieldError",
    "SUCCESS",
    "Failure",
    "Outcome",
    "Success",
    "is_success",
    "DisplayName",
    "FieldSpec",
    "RecordSchema",
    "predicate",
    "FieldFailure",
    "ValidationMode",
    "ValidationReport",
    "Validator",
]
