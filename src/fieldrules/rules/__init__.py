"""Rule families.

Importing this package registers every built-in rule kind.
"""

from .base import CheckRule, MultiFieldRule, Rule
from .collection import ListCountMax, ListCountMin, ListCountRange, ListItemsCondition, ListItemsUnique, RequiredList
from .comparison import CompareFields, GreaterThan, LessThan, NotEqualTo
from .conditional import (
    Condition,
    ConditionalPattern,
    ConditionalValidation,
    Equals,
    InSet,
    IsFalse,
    IsTrue,
    RangeIf,
    RequiredIf,
    RequiredIfFalse,
    RequiredIfInSet,
    RequiredIfNotNullOrWhiteSpace,
    RequiredIfNullOrWhiteSpace,
    RequiredIfTrue,
)
from .custom import PredicateValidation
from .date import DateEarlierThan, DateIsUtc, DateLaterThan, DateRange
from .generic import AllowedValues, DisallowedValues
from .multifield import AtLeastOneRequired, MutuallyExclusive, OnlyOneRequired
from .numeric import DecimalPrecision
from .registry import available_rules, build_rule, create_rule, get_rule_class, register_rule
from .required import RequiredEnum, RequiredGuid, RequiredString
from .string import StringContains, StringLengthEquals, StringNotContains, Ulid

__all__ = [
    "Rule",
    "CheckRule",
    "MultiFieldRule",
    "register_rule",
    "create_rule",
    "build_rule",
    "get_rule_class",
    "available_rules",
    "ListCountMax",
    "ListCountMin",
    "ListCountRange",
    "ListItemsCondition",
    "ListItemsUnique",
    "RequiredList",
    "CompareFields",
    "GreaterThan",
    "LessThan",
    "NotEqualTo",
    "Condition",
    "Equals",
    "InSet",
    "IsTrue",
    "IsFalse",
    "ConditionalPattern",
    "ConditionalValidation",
    "RangeIf",
    "RequiredIf",
    "RequiredIfFalse",
    "RequiredIfInSet",
    "RequiredIfNotNullOrWhiteSpace",
    "RequiredIfNullOrWhiteSpace",
    "RequiredIfTrue",
    "RequiredEnum",
    "RequiredGuid",
    "RequiredString",
    "DateEarlierThan",
    "DateIsUtc",
    "DateLaterThan",
    "DateRange",
    "AllowedValues",
    "DisallowedValues",
    "AtLeastOneRequired",
    "MutuallyExclusive",
    "OnlyOneRequired",
    "DecimalPrecision",
    "StringContains",
    "StringLengthEquals",
    "StringNotContains",
    "Ulid",
    "PredicateValidation",
]
