"""Distance-banded earning rules, optionally restricted to one country."""

import logging
from collections.abc import Callable, Sequence
from typing import Optional, Union

from qcalc.distance import calc_distance
from qcalc.exceptions import ConfigurationError
from qcalc.models import (
    Airport,
    CalculationResult,
    DistanceBand,
    DistanceBandTable,
    Segment,
)
from qcalc.rules.base import RuleKind, build_result, register_rule

logger = logging.getLogger(__name__)

DistanceFn = Callable[[Airport, Airport], float]
BandsConfig = Union[DistanceBandTable, Sequence[Union[DistanceBand, dict]]]


def _format_miles(value: float) -> str:
    """Render 750.0 as "750" and 750.5 as "750.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _band_range(band: DistanceBand) -> str:
    if band.is_unbounded:
        return f"{_format_miles(band.min_distance)} and over"
    return f"{_format_miles(band.min_distance)} - {_format_miles(band.max_distance)}"


def _as_band_table(distance_bands: BandsConfig) -> DistanceBandTable:
    if isinstance(distance_bands, DistanceBandTable):
        return distance_bands
    return DistanceBandTable(bands=list(distance_bands))


@register_rule
class DistanceRule:
    """Earnings looked up by the great-circle distance of the segment."""

    kind = RuleKind.DISTANCE

    def __init__(
        self,
        name: str,
        rule_url: str,
        distance_bands: BandsConfig,
        distance_fn: DistanceFn = calc_distance,
    ) -> None:
        self.name = name
        self.rule_url = rule_url
        self.distance_bands = _as_band_table(distance_bands)
        self._distance_fn = distance_fn

    def _get_distance_band(self, distance: float) -> Optional[DistanceBand]:
        return self.distance_bands.find(distance)

    def applies(self, segment: Segment, fare_earn_category: str) -> bool:
        distance = self._distance_fn(segment.from_airport, segment.to_airport)
        band = self._get_distance_band(distance)
        if band is None:
            return False

        return fare_earn_category in band.earnings

    def calculate(self, segment: Segment, fare_earn_category: str) -> CalculationResult:
        distance = self._distance_fn(segment.from_airport, segment.to_airport)

        band = self._get_distance_band(distance)
        if band is None:
            raise ConfigurationError(
                f"No applicable distance band to calculate with for rule: {self.name}"
            )

        band_notes = f"using band {_band_range(band)}"
        earnings = band.earnings.get(fare_earn_category)
        if earnings is None:
            raise ConfigurationError(
                f"Rule {self.name} has no earnings for fare earn category "
                f"{fare_earn_category!r} {band_notes}"
            )

        logger.debug("%s: %s miles %s", self.name, distance, band_notes)

        return build_result(
            self,
            fare_earn_category,
            f"Distance calculated to {_format_miles(distance)} miles, {band_notes}",
            earnings.qantas_points,
            earnings.status_credits,
        )


@register_rule
class IntraCountryRule:
    """Distance-banded earnings for flights wholly within one country."""

    kind = RuleKind.INTRA_COUNTRY

    def __init__(
        self,
        name: str,
        rule_url: str,
        country: str,
        distance_bands: BandsConfig,
        distance_fn: DistanceFn = calc_distance,
    ) -> None:
        self.name = name
        self.rule_url = rule_url
        self.country = country
        self.distance_rule = DistanceRule(name, rule_url, distance_bands, distance_fn)

    def applies(self, segment: Segment, fare_earn_category: str) -> bool:
        if (
            segment.from_airport.country != self.country
            or segment.to_airport.country != self.country
        ):
            return False

        return self.distance_rule.applies(segment, fare_earn_category)

    def calculate(self, segment: Segment, fare_earn_category: str) -> CalculationResult:
        return self.distance_rule.calculate(segment, fare_earn_category)
