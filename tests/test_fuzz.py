"""Property-based tests for earning rules using Hypothesis.

These tests generate random distances, band boundaries, routes and rate
rows and check the invariants every rule must hold regardless of input.
"""

from hypothesis import given, settings, HealthCheck
import hypothesis.strategies as st

from qcalc.models import Airport, DistanceBand, DistanceBandTable, EarningsRecord, Segment
from qcalc.parser import parse_earning_rates
from qcalc.rules import DistanceRule, FareClassRule, GeographicalRule, IntraCountryRule


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

COUNTRIES = ["Australia", "New Zealand", "Japan", "United States"]
CITIES = ["Sydney", "Auckland", "Tokyo", "Honolulu", "Perth"]

iata_codes = st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=3, max_size=3)

airports = st.builds(
    Airport,
    iata=iata_codes,
    city=st.sampled_from(CITIES),
    country=st.sampled_from(COUNTRIES),
    latitude=st.floats(min_value=-90, max_value=90),
    longitude=st.floats(min_value=-180, max_value=180),
)

segments = st.builds(Segment, from_airport=airports, to_airport=airports)

distances = st.floats(min_value=0, max_value=20000, allow_nan=False)


@st.composite
def band_tables(draw):
    """Contiguous bands from 0 to unbounded with random cut points."""
    cuts = sorted(draw(st.sets(st.integers(min_value=1, max_value=15000), min_size=1, max_size=6)))
    lows = [0] + cuts
    highs = cuts + [None]
    earnings = {"economy": EarningsRecord(qantas_points=800, status_credits=10)}
    bands = [
        DistanceBand(min_distance=low, max_distance=high, earnings=earnings)
        for low, high in zip(lows, highs)
    ]
    order = draw(st.permutations(bands))
    return DistanceBandTable(bands=order)


def _fixed(distance):
    return lambda from_airport, to_airport: distance


# ---------------------------------------------------------------------------
# Distance bands
# ---------------------------------------------------------------------------


@given(table=band_tables(), distance=st.floats(min_value=0.001, max_value=50000, allow_nan=False))
@settings(max_examples=200)
def test_exactly_one_band_matches_positive_distance(table, distance):
    matches = [b for b in table.bands if b.contains(distance)]
    assert len(matches) == 1
    assert table.find(distance) is matches[0]


@given(table=band_tables())
def test_boundaries_belong_to_lower_band(table):
    for band in table.bands:
        if band.max_distance is not None:
            assert table.find(band.max_distance) is band


@given(table=band_tables(), distance=distances)
@settings(suppress_health_check=[HealthCheck.too_slow])
def test_distance_rule_applies_iff_band_found(table, distance):
    rule = DistanceRule("Fuzz", "", table, distance_fn=_fixed(distance))
    seg = Segment(
        from_airport=Airport(iata="SYD", country="Australia"),
        to_airport=Airport(iata="MEL", country="Australia"),
    )
    assert rule.applies(seg, "economy") is (table.find(distance) is not None)
    if rule.applies(seg, "economy"):
        assert rule.calculate(seg, "economy") == rule.calculate(seg, "economy")


# ---------------------------------------------------------------------------
# Intra-country
# ---------------------------------------------------------------------------


@given(seg=segments)
@settings(max_examples=200)
def test_intra_country_requires_both_endpoints(seg):
    bands = [DistanceBand(min_distance=0, earnings={"economy": EarningsRecord(qantas_points=1, status_credits=1)})]
    rule = IntraCountryRule("AU", "", "Australia", bands, distance_fn=_fixed(100))
    both_home = seg.from_airport.country == "Australia" and seg.to_airport.country == "Australia"
    assert rule.applies(seg, "economy") is both_home


# ---------------------------------------------------------------------------
# Fare class
# ---------------------------------------------------------------------------


@given(seg=segments, category=st.text(max_size=12))
def test_fare_class_rule_ignores_segment(seg, category):
    rule = FareClassRule(
        "Flat", "", {"starter": {"qantas_points": 300, "status_credits": 5, "calculation_notes": "flat"}}
    )
    assert rule.applies(seg, category) is (category == "starter")


# ---------------------------------------------------------------------------
# Geographical
# ---------------------------------------------------------------------------


@given(seg=segments)
@settings(max_examples=200)
def test_geographical_direction_invariance(seg):
    rule = GeographicalRule(
        "Geo",
        "",
        {
            "origin": {"country": ["australia"]},
            "destination": {
                "city": {"tokyo": {"economy": {"qantas_points": 5, "status_credits": 1}}},
                "country": {"united states": {"economy": {"qantas_points": 7, "status_credits": 2}}},
            },
        },
        region_lookup=lambda iata, region: False,
    )
    reverse = Segment(from_airport=seg.to_airport, to_airport=seg.from_airport)
    assert rule.applies(seg, "economy") == rule.applies(reverse, "economy")
    if rule.applies(seg, "economy"):
        assert rule.calculate(seg, "economy") == rule.calculate(reverse, "economy")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

tokens = st.one_of(
    st.integers(min_value=0, max_value=99999).map(str),
    st.sampled_from(["-", "n/a", "abc", "*"]),
)


@given(
    points=st.lists(tokens, max_size=6),
    credits=st.lists(tokens, max_size=6),
    fare_classes=st.lists(st.text(min_size=1, max_size=5), max_size=8, unique=True),
)
def test_parser_never_fails(points, credits, fare_classes):
    rates = parse_earning_rates("  ".join(points), " ".join(credits), fare_classes)
    assert list(rates) == fare_classes
    for index, fare_class in enumerate(fare_classes):
        record = rates[fare_class]
        expected_points = int(points[index]) if index < len(points) and points[index].isdigit() else 0
        expected_credits = int(credits[index]) if index < len(credits) and credits[index].isdigit() else 0
        assert record.qantas_points == expected_points
        assert record.status_credits == expected_credits
