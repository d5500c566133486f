"""Geographical earning rule: origin/destination pairings in either direction.

A rule is configured with origin locations and destination locations, each
given as any mix of airports, cities, countries and regions::

    origin:
      region: [australia]
    destination:
      city:
        london: {business: {qantas_points: 12000, status_credits: 280}}
      region:
        asia: {business: {qantas_points: 6000, status_credits: 160}}

Locations are tried in priority order airport, city, country, region. Only
the destination carries earnings. A rule for Australia to London also
matches London to Australia.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Optional, Union

from qcalc.exceptions import ConfigurationError
from qcalc.models import (
    Airport,
    CalculationResult,
    EarningsTable,
    GeographicalConfig,
    LocationMatch,
    LocationType,
    Segment,
)
from qcalc.regions import REGION_DISPLAY, is_in_region
from qcalc.rules.base import RuleKind, build_result, register_rule

logger = logging.getLogger(__name__)

RegionLookup = Callable[[str, str], bool]


def _airport_key(airport: Airport, location_type: LocationType) -> str:
    if location_type == LocationType.AIRPORT:
        return airport.iata.upper()
    if location_type == LocationType.CITY:
        return airport.city.lower()
    return airport.country.lower()


@register_rule
class GeographicalRule:
    """Earnings by matching the segment's airports to origin/destination locations."""

    kind = RuleKind.GEOGRAPHICAL

    def __init__(
        self,
        name: str,
        rule_url: str,
        rule_config: Union[GeographicalConfig, dict],
        region_lookup: RegionLookup = is_in_region,
        region_display: Mapping[str, str] = REGION_DISPLAY,
    ) -> None:
        self.name = name
        self.rule_url = rule_url
        self.rule_config = GeographicalConfig.model_validate(rule_config)
        self._region_lookup = region_lookup
        self._region_display = region_display

    def _match(self, airport: Airport, locations) -> Optional[LocationMatch]:
        """First configured location containing the airport.

        ``locations`` maps a LocationType to a collection of configured
        values (a tuple for origins, a dict for destinations) or None.
        """
        for location_type in LocationType:
            configured = locations(location_type)
            if not configured:
                continue

            if location_type == LocationType.REGION:
                for region in configured:
                    if self._region_lookup(airport.iata.lower(), region):
                        return LocationMatch(type=location_type, value=region)
                continue

            key = _airport_key(airport, location_type)
            if key in configured:
                return LocationMatch(type=location_type, value=key)

        return None

    def _get_origin(self, airport: Airport) -> Optional[LocationMatch]:
        return self._match(airport, self.rule_config.origin.locations)

    def _get_destination(self, airport: Airport) -> Optional[LocationMatch]:
        return self._match(airport, self.rule_config.destination.locations)

    def _get_origin_and_destination(
        self, segment: Segment
    ) -> tuple[Optional[LocationMatch], Optional[LocationMatch]]:
        origin = self._get_origin(segment.from_airport)
        destination = self._get_destination(segment.to_airport)

        if origin is None or destination is None:
            origin = self._get_origin(segment.to_airport)
            destination = self._get_destination(segment.from_airport)

        return origin, destination

    def _earnings(self, destination: Optional[LocationMatch]) -> Optional[EarningsTable]:
        if destination is None:
            return None
        return self.rule_config.destination.earnings_for(destination)

    def _render_location(self, location: LocationMatch) -> str:
        if location.type == LocationType.AIRPORT:
            return f"{location.value} airport"
        elif location.type == LocationType.CITY:
            return location.value
        elif location.type == LocationType.COUNTRY:
            return location.value
        elif location.type == LocationType.REGION:
            return self._region_display.get(location.value) or location.value
        raise ConfigurationError(
            f"Cannot create calculation notes for unknown type {location.type}"
        )

    def _build_calculation_notes(self, origin: LocationMatch, destination: LocationMatch) -> str:
        return f"{self._render_location(origin)} to {self._render_location(destination)}"

    def applies(self, segment: Segment, fare_earn_category: str) -> bool:
        origin, destination = self._get_origin_and_destination(segment)
        if origin is None:
            return False

        earnings = self._earnings(destination)
        return earnings is not None and fare_earn_category in earnings

    def calculate(self, segment: Segment, fare_earn_category: str) -> CalculationResult:
        origin, destination = self._get_origin_and_destination(segment)
        earnings = self._earnings(destination)
        if origin is None or earnings is None or fare_earn_category not in earnings:
            raise ConfigurationError(
                f"Rule {self.name} does not apply to "
                f"{segment.from_airport.iata}-{segment.to_airport.iata} "
                f"for fare earn category {fare_earn_category!r}"
            )

        logger.debug(
            "%s: origin %s=%s, destination %s=%s",
            self.name,
            origin.type.value,
            origin.value,
            destination.type.value,
            destination.value,
        )

        return build_result(
            self,
            fare_earn_category,
            self._build_calculation_notes(origin, destination),
            earnings[fare_earn_category].qantas_points,
            earnings[fare_earn_category].status_credits,
        )
