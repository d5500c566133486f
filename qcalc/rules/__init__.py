"""Earning rules -- importing the package registers every rule kind."""

from qcalc.rules.base import (
    EarningRule,
    RuleKind,
    get_registered_rules,
    get_rule_class,
    register_rule,
)
from qcalc.rules.distance import DistanceRule, IntraCountryRule
from qcalc.rules.fare_class import FareClassRule
from qcalc.rules.geography import GeographicalRule

__all__ = [
    "DistanceRule",
    "EarningRule",
    "FareClassRule",
    "GeographicalRule",
    "IntraCountryRule",
    "RuleKind",
    "get_registered_rules",
    "get_rule_class",
    "register_rule",
]
