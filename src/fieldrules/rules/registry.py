"""Registry mapping rule kinds to their constructors.

Rule-set files and composite rules refer to rules by kind name
(``"required_string"``). Every rule class registers itself here on import.
"""

import copy
import logging
from collections.abc import Callable
from typing import Any

from ..errors import ConfigurationError
from .base import Rule

logger = logging.getLogger(__name__)

RULES: dict[str, type[Rule]] = {}

RuleFactory = str | type[Rule] | Callable[..., Rule] | Rule


def register_rule(kind: str):
    """Class decorator registering a rule under ``kind``."""
    def decorator(cls: type[Rule]) -> type[Rule]:
        if kind in RULES and RULES[kind] is not cls:
            raise ValueError(f"Rule kind already registered: {kind}")
        cls.kind = kind
        RULES[kind] = cls
        return cls
    return decorator


def get_rule_class(kind: str) -> type[Rule]:
    """Look up a registered rule class by kind."""
    try:
        return RULES[kind]
    except KeyError:
        available = ", ".join(sorted(RULES))
        raise ConfigurationError(f"Unknown rule kind '{kind}'. Available: {available}") from None


def create_rule(kind: str, *args: Any, **kwargs: Any) -> Rule:
    """Construct a registered rule from literal parameters."""
    return build_rule(kind, *args, **kwargs)


def build_rule(factory: RuleFactory, *args: Any, **kwargs: Any) -> Rule:
    """Build a fresh rule instance from a factory.

    Args:
        factory: Registry kind, Rule subclass, callable returning a Rule, or
            a Rule instance (which is copied so the caller keeps no alias)
        *args: Positional constructor arguments
        **kwargs: Keyword constructor arguments

    Returns:
        Newly constructed rule

    Raises:
        ConfigurationError: If the factory is unknown or construction fails
    """
    if isinstance(factory, Rule):
        if args or kwargs:
            raise ConfigurationError("arguments cannot be passed with a rule instance")
        return copy.deepcopy(factory)

    if isinstance(factory, str):
        factory = get_rule_class(factory)

    if not callable(factory):
        raise ConfigurationError(f"Rule factory must be a kind name or callable, got: {factory!r}")

    try:
        rule = factory(*args, **kwargs)
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Could not create an instance of the rule: {e}") from e

    if not isinstance(rule, Rule):
        raise ConfigurationError(f"Rule factory returned {type(rule).__name__}, expected a Rule")

    logger.debug(f"Built rule {rule.kind} with args={args!r} kwargs={kwargs!r}")
    return rule


def available_rules() -> list[tuple[str, type[Rule]]]:
    """Registered rules sorted by kind."""
    return sorted(RULES.items())
