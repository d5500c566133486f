"""Rule engine base: protocol, rule kinds, registry, and decorators."""

from __future__ import annotations

from enum import Enum
from typing import Protocol

from qcalc.models import CalculationResult, Segment


class RuleKind(str, Enum):
    """The closed set of earning rule variants."""

    DISTANCE = "distance"
    INTRA_COUNTRY = "intra_country"
    FARE_CLASS = "fare_class"
    GEOGRAPHICAL = "geographical"


class EarningRule(Protocol):
    """Protocol for earning rules."""

    kind: RuleKind
    name: str
    rule_url: str

    def applies(self, segment: Segment, fare_earn_category: str) -> bool: ...

    def calculate(self, segment: Segment, fare_earn_category: str) -> CalculationResult: ...


def build_result(
    rule: EarningRule,
    fare_earn_category: str,
    notes: str,
    qantas_points: int,
    status_credits: int,
) -> CalculationResult:
    """Build a CalculationResult stamped with the rule's identity."""
    return CalculationResult(
        rule=rule.name,
        rule_url=rule.rule_url,
        fare_earn_category=fare_earn_category,
        notes=notes,
        qantas_points=qantas_points,
        status_credits=status_credits,
    )


# Global rule registry
_RULE_REGISTRY: dict[RuleKind, type] = {}


def register_rule(cls: type) -> type:
    """Decorator to register a rule class under its kind."""
    _RULE_REGISTRY[RuleKind(cls.kind)] = cls
    return cls


def get_rule_class(kind: RuleKind | str) -> type | None:
    """Return the rule class registered for a kind, or None."""
    try:
        return _RULE_REGISTRY.get(RuleKind(kind))
    except ValueError:
        return None


def get_registered_rules() -> dict[RuleKind, type]:
    """Return all registered rule classes by kind."""
    return dict(_RULE_REGISTRY)
