"""Airport-to-region classification for geographical earning rules."""

from pathlib import Path

import airportsdata
import yaml

_airports_db = airportsdata.load("IATA")

_DATA_DIR = Path(__file__).parent / "data"

# Load region data
with open(_DATA_DIR / "regions.yaml") as f:
    _REGION_DATA: dict[str, dict] = yaml.safe_load(f).get("regions", {})

REGION_DISPLAY: dict[str, str] = {
    name: data["display"] for name, data in _REGION_DATA.items() if data.get("display")
}

_REGION_COUNTRIES: dict[str, frozenset[str]] = {
    name: frozenset(data.get("countries", [])) for name, data in _REGION_DATA.items()
}
_REGION_AIRPORTS: dict[str, frozenset[str]] = {
    name: frozenset(data.get("airports", [])) for name, data in _REGION_DATA.items()
}
_REGION_EXCLUDES: dict[str, frozenset[str]] = {
    name: frozenset(data.get("exclude_airports", [])) for name, data in _REGION_DATA.items()
}


def get_country_code(airport_code: str) -> str:
    """ISO country code for an airport, or "" if unknown."""
    airport = _airports_db.get(airport_code.upper())
    if airport is None:
        return ""
    return airport.get("country", "")


def is_in_region(airport_code: str, region: str) -> bool:
    """Check whether an airport belongs to a region.

    Resolution order:
    1. Explicit airports listed for the region
    2. Excluded airports
    3. Country lookup via airportsdata
    Unknown regions and airports are never in any region.
    """
    if region not in _REGION_DATA:
        return False

    code = airport_code.upper()
    if code in _REGION_AIRPORTS[region]:
        return True
    if code in _REGION_EXCLUDES[region]:
        return False

    country = get_country_code(code)
    return bool(country) and country in _REGION_COUNTRIES[region]


def regions_for(airport_code: str) -> list[str]:
    """All regions containing an airport, in definition order."""
    return [region for region in _REGION_DATA if is_in_region(airport_code, region)]


def known_regions() -> list[str]:
    """All configured region keys, in definition order."""
    return list(_REGION_DATA)
