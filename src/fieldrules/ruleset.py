"""Rule-set files: declarative JSON description of a record schema.

Example::

    {
      "name": "Order",
      "accessor": "mapping",
      "fields": [
        {"name": "Items", "rules": [{"kind": "list_count_max", "args": [3]}]},
        {"name": "Name", "displayName": "Customer name",
         "rules": [{"kind": "required_if", "args": ["Status", "Active"]}]}
      ],
      "recordRules": [{"kind": "at_least_one_required", "args": ["Email", "Phone"]}]
    }

Composite rules name their inner rule by kind, e.g.
``{"kind": "list_items_condition", "args": ["required_string"]}``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .context import ACCESSORS
from .errors import ConfigurationError
from .rules import Rule, create_rule
from .schema import RecordSchema

logger = logging.getLogger(__name__)


class RuleSpec(BaseModel):
    """One rule: registry kind plus literal constructor parameters."""
    kind: str
    args: list[Any] = Field(default_factory=list)
    kwargs: dict[str, Any] = Field(default_factory=dict)
    message: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v):
        if not v.strip():
            raise ValueError("kind cannot be empty")
        return v.strip()

    def build(self) -> Rule:
        rule = create_rule(self.kind, *self.args, **self.kwargs)
        if self.message:
            rule.with_message(self.message)
        return rule


class FieldRules(BaseModel):
    """Rules attached to one field."""
    name: str
    display_name: str | None = Field(alias="displayName", default=None)
    rules: list[RuleSpec] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class RuleSet(BaseModel):
    """Complete rule-set file model."""
    name: str | None = None
    accessor: Literal["auto", "attribute", "mapping"] = "auto"
    field_rules: list[FieldRules] = Field(alias="fields", default_factory=list)
    record_rules: list[RuleSpec] = Field(alias="recordRules", default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("field_rules")
    @classmethod
    def validate_unique_fields(cls, v):
        names = [spec.name for spec in v]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"fields declared more than once: {duplicates}")
        return v

    def build_schema(self) -> RecordSchema:
        """Construct every rule and assemble a RecordSchema.

        Raises:
            ConfigurationError: If any rule cannot be constructed
        """
        schema = RecordSchema(name=self.name, accessor=ACCESSORS[self.accessor])
        for field_rules in self.field_rules:
            rules = []
            for index, spec in enumerate(field_rules.rules):
                try:
                    rules.append(spec.build())
                except ConfigurationError as e:
                    raise ConfigurationError(f"fields.{field_rules.name}.rules[{index}] ({spec.kind}): {e}") from e
            schema.add_field(field_rules.name, *rules, display_name=field_rules.display_name)

        for index, spec in enumerate(self.record_rules):
            try:
                schema.add_record_rule(spec.build())
            except ConfigurationError as e:
                raise ConfigurationError(f"recordRules[{index}] ({spec.kind}): {e}") from e

        logger.debug(f"Built {schema!r} from rule set")
        return schema


def load_ruleset(path: str | Path) -> RuleSet:
    """Load and validate a rule-set JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or not a valid rule set
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rule set not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in rule set {path}: {e}")

    try:
        return RuleSet.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid rule set {path}: {e}")


def load_schema(path: str | Path) -> RecordSchema:
    """Load a rule-set file and build its schema."""
    return load_ruleset(path).build_schema()
