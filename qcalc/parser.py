"""Earning rate parser.

Converts the whitespace-delimited rate rows found in published earning
tables into typed earnings per fare class, e.g.::

    points:  "1,000   800  500"
    credits: "20 15 10"
    classes: ["business", "premium_economy", "economy"]

Sparse tables use placeholders ("-", "n/a") for classes that earn nothing,
so unreadable tokens become zero rather than errors.
"""

import re
from collections.abc import Sequence

from qcalc.models import EarningsRecord

_WHITESPACE = re.compile(r"\s+")
_LEADING_INT = re.compile(r"\d+")


def parse_int_or_default(token: str, default: int = 0) -> int:
    """Leading integer of a token, or default if it does not start with digits."""
    match = _LEADING_INT.match(token.strip())
    if match is None:
        return default
    return int(match.group())


def _tokens(raw: str) -> list[str]:
    return _WHITESPACE.sub(" ", raw.strip()).split(" ")


def parse_earning_rates(
    points_string: str,
    credits_string: str,
    fare_classes: Sequence[str],
) -> dict[str, EarningsRecord]:
    """Map each fare class to the points and credits at the same position.

    Thousand separators are stripped from the points row only. Fare classes
    beyond the end of either row earn zero.
    """
    points = _tokens(points_string.replace(",", ""))
    credits = _tokens(credits_string)

    rates: dict[str, EarningsRecord] = {}
    for index, fare_class in enumerate(fare_classes):
        rates[fare_class] = EarningsRecord(
            qantas_points=parse_int_or_default(points[index]) if index < len(points) else 0,
            status_credits=parse_int_or_default(credits[index]) if index < len(credits) else 0,
        )
    return rates
