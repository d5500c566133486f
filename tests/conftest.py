"""Shared test fixtures for the earnings calculator."""

import yaml
import pytest
from pathlib import Path

from qcalc.models import Airport, Segment

FIXTURES_DIR = Path(__file__).parent / "fixtures"

AIRPORTS = {
    "SYD": Airport(iata="SYD", city="Sydney", country="Australia", latitude=-33.9461, longitude=151.1772),
    "MEL": Airport(iata="MEL", city="Melbourne", country="Australia", latitude=-37.6733, longitude=144.8433),
    "BNE": Airport(iata="BNE", city="Brisbane", country="Australia", latitude=-27.3842, longitude=153.1175),
    "PER": Airport(iata="PER", city="Perth", country="Australia", latitude=-31.9403, longitude=115.9669),
    "AKL": Airport(iata="AKL", city="Auckland", country="New Zealand", latitude=-37.0081, longitude=174.7917),
    "LAX": Airport(iata="LAX", city="Los Angeles", country="United States", latitude=33.9425, longitude=-118.4081),
    "HNL": Airport(iata="HNL", city="Honolulu", country="United States", latitude=21.3187, longitude=-157.9225),
    "LHR": Airport(iata="LHR", city="London", country="United Kingdom", latitude=51.4775, longitude=-0.4614),
    "LGW": Airport(iata="LGW", city="London", country="United Kingdom", latitude=51.1481, longitude=-0.1903),
    "HND": Airport(iata="HND", city="Tokyo", country="Japan", latitude=35.5523, longitude=139.7800),
    "SIN": Airport(iata="SIN", city="Singapore", country="Singapore", latitude=1.3644, longitude=103.9915),
}


@pytest.fixture
def airports():
    """Airport records keyed by IATA code."""
    return AIRPORTS


@pytest.fixture
def make_segment():
    """Return a function that builds a segment from two IATA codes."""

    def _make(from_code: str, to_code: str) -> Segment:
        return Segment(from_airport=AIRPORTS[from_code], to_airport=AIRPORTS[to_code])

    return _make


@pytest.fixture
def load_yaml():
    """Return a function that loads a YAML fixture file."""

    def _load(name: str) -> dict:
        path = FIXTURES_DIR / name
        with open(path) as f:
            return yaml.safe_load(f)

    return _load


@pytest.fixture
def rules_path():
    """Path to the sample rules file."""
    return FIXTURES_DIR / "rules.yaml"
