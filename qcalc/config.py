"""Build earning rules from configuration.

A rules file is YAML::

    fare_classes: [business, premium_economy, economy]
    rules:
      - kind: intra_country
        name: Australian domestic
        url: https://example.com/earn/domestic
        country: Australia
        distance_bands:
          - min_distance: 0
            max_distance: 750
            earnings:
              points: "1,600 1,200 800"
              credits: "40 30 20"

Earnings tables in distance bands and geographical destinations may be
written either as a mapping of category to ``{qantas_points,
status_credits}`` or as raw ``points``/``credits`` rate rows, which are
parsed against the entry's ``fare_classes`` (falling back to the file-level
list). Fare-class rules carry ``calculation_notes`` per category, so their
``earnings`` are always written as a mapping.
"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from qcalc.exceptions import ConfigurationError
from qcalc.models import EarningsRecord, EarningsTable
from qcalc.parser import parse_earning_rates
from qcalc.rules import EarningRule, RuleKind, get_rule_class

logger = logging.getLogger(__name__)


def _is_rate_rows(raw: dict) -> bool:
    return set(raw) == {"points", "credits"} and all(
        isinstance(raw[k], (str, int)) for k in ("points", "credits")
    )


def _earnings_table(raw: Any, fare_classes: Sequence[str]) -> EarningsTable:
    """Typed earnings from either a category mapping or raw rate rows."""
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Earnings must be a mapping, got {type(raw).__name__}")

    if _is_rate_rows(raw):
        if not fare_classes:
            raise ConfigurationError("Rate rows need a fare_classes list to parse against")
        return parse_earning_rates(str(raw["points"]), str(raw["credits"]), fare_classes)

    return {category: EarningsRecord.model_validate(record) for category, record in raw.items()}


def _distance_bands(entry: dict, fare_classes: Sequence[str]) -> list[dict]:
    bands = entry.get("distance_bands")
    if not bands:
        raise ConfigurationError("distance_bands is required")
    if not isinstance(bands, list):
        raise ConfigurationError("distance_bands must be a list")

    parsed = []
    for band in bands:
        if not isinstance(band, dict):
            raise ConfigurationError(f"distance band must be a mapping, got {band!r}")
        parsed.append({**band, "earnings": _earnings_table(band.get("earnings", {}), fare_classes)})
    return parsed


def _destination(entry: dict, fare_classes: Sequence[str]) -> dict:
    destination = entry.get("destination")
    if not destination:
        raise ConfigurationError("destination is required")
    if not isinstance(destination, dict):
        raise ConfigurationError("destination must be a mapping")

    parsed = {}
    for location_type, locations in destination.items():
        if not isinstance(locations, dict):
            raise ConfigurationError(f"destination {location_type} must be a mapping")
        parsed[location_type] = {
            value: _earnings_table(raw, fare_classes) for value, raw in locations.items()
        }
    return parsed


def build_rule(entry: dict, fare_classes: Sequence[str] = ()) -> EarningRule:
    """Build one rule from its configuration entry."""
    name = entry.get("name", "<unnamed>")
    kind = entry.get("kind")
    rule_cls = get_rule_class(kind) if kind else None
    if rule_cls is None:
        raise ConfigurationError(f"Unknown rule kind {kind!r} for rule: {name}")

    url = entry.get("url", "")
    fare_classes = entry.get("fare_classes", fare_classes)

    try:
        if rule_cls.kind == RuleKind.DISTANCE:
            rule = rule_cls(name, url, _distance_bands(entry, fare_classes))
        elif rule_cls.kind == RuleKind.INTRA_COUNTRY:
            if not entry.get("country"):
                raise ConfigurationError("country is required")
            rule = rule_cls(name, url, entry["country"], _distance_bands(entry, fare_classes))
        elif rule_cls.kind == RuleKind.FARE_CLASS:
            earnings = entry.get("earnings")
            if not earnings:
                raise ConfigurationError("earnings is required")
            rule = rule_cls(name, url, earnings)
        else:
            rule = rule_cls(
                name,
                url,
                {
                    "origin": entry.get("origin") or {},
                    "destination": _destination(entry, fare_classes),
                },
            )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration for rule: {name}\n{exc}") from exc
    except ConfigurationError as exc:
        raise ConfigurationError(f"Invalid configuration for rule: {name}: {exc}") from exc

    logger.debug("Built %s rule %s", rule.kind.value, name)
    return rule


def build_rules(config: dict) -> list[EarningRule]:
    """Build every rule in a parsed rules document, in declaration order."""
    fare_classes = config.get("fare_classes", [])
    return [build_rule(entry, fare_classes) for entry in config.get("rules", [])]


def load_rules(path: Union[str, Path]) -> list[EarningRule]:
    """Load rules from a YAML file."""
    path = Path(path)
    with open(path) as f:
        config = yaml.safe_load(f) or {}

    rules = build_rules(config)
    logger.info("Loaded %d earning rules from %s", len(rules), path)
    return rules
