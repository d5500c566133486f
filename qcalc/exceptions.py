"""Exceptions raised by the earnings calculator."""


class QCalcError(Exception):
    """Base exception for all earnings calculator errors."""


class ConfigurationError(QCalcError):
    """Raised when rule configuration is malformed or a rule is used out of contract.

    Examples: calculate() called for a segment the rule does not apply to,
    an unknown rule kind, or an unknown location type in calculation notes.
    """
