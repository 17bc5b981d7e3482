"""Outcome of a single rule evaluation.

An outcome is either ``Success`` (no payload) or ``Failure`` carrying a
message. Rules return the canonical ``SUCCESS`` instance, but callers should
branch on the variant (``outcome.ok``) rather than on identity.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Success:
    """Successful evaluation."""

    @property
    def ok(self) -> bool:
        return True

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "SUCCESS"


@dataclass(frozen=True)
class Failure:
    """Failed evaluation with a human-readable message."""
    message: str

    @property
    def ok(self) -> bool:
        return False

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.message


Outcome = Success | Failure

SUCCESS = Success()


def is_success(outcome: Outcome) -> bool:
    """Check an outcome by variant."""
    return isinstance(outcome, Success)
