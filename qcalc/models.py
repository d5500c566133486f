"""Domain models for the Qantas earnings calculator.

Pydantic models for airports, flight segments, earnings tables, rule
configuration, and calculation results. All models are frozen: rules and
their tables are built once and only read afterwards.
"""

from enum import Enum
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


# --- Core Segment Models ---


class Airport(BaseModel):
    """Airport reference data."""

    iata: str = Field(min_length=3, max_length=3)
    city: str = ""
    country: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    model_config = {"frozen": True}

    @property
    def coordinates(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


class Segment(BaseModel):
    """A single flown leg between two airports."""

    from_airport: Airport = Field(alias="from")
    to_airport: Airport = Field(alias="to")

    model_config = {"frozen": True, "populate_by_name": True}


# --- Earnings Models ---


class EarningsRecord(BaseModel):
    """Points and status credits earned for one fare-earn category."""

    qantas_points: int = Field(ge=0)
    status_credits: int = Field(ge=0)

    model_config = {"frozen": True, "extra": "forbid"}


EarningsTable = dict[str, EarningsRecord]


class DistanceBand(BaseModel):
    """A distance range (min exclusive, max inclusive) mapped to earnings."""

    min_distance: float = Field(ge=0)
    max_distance: Optional[float] = None  # None = unbounded
    earnings: EarningsTable = Field(default_factory=dict)

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def bounds_ordered(self) -> "DistanceBand":
        if self.max_distance is not None and self.max_distance <= self.min_distance:
            raise ValueError(
                f"max_distance {self.max_distance} must be greater than "
                f"min_distance {self.min_distance}"
            )
        return self

    @property
    def is_unbounded(self) -> bool:
        return self.max_distance is None

    def contains(self, distance: float) -> bool:
        if distance <= self.min_distance:
            return False
        return self.max_distance is None or distance <= self.max_distance

    def overlaps(self, other: "DistanceBand") -> bool:
        """Whether any distance falls inside both bands."""
        self_max = float("inf") if self.max_distance is None else self.max_distance
        other_max = float("inf") if other.max_distance is None else other.max_distance
        return self.min_distance < other_max and other.min_distance < self_max


class DistanceBandTable(BaseModel):
    """Ordered, non-overlapping distance bands.

    Lookup is first match in declaration order; bands are never sorted.
    """

    bands: list[DistanceBand] = Field(min_length=1)

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def bands_disjoint(self) -> "DistanceBandTable":
        for i, band in enumerate(self.bands):
            for other in self.bands[i + 1 :]:
                if band.overlaps(other):
                    raise ValueError(
                        f"Distance bands {_band_label(band)} and "
                        f"{_band_label(other)} overlap"
                    )
        return self

    def find(self, distance: float) -> Optional[DistanceBand]:
        for band in self.bands:
            if band.contains(distance):
                return band
        return None


def _band_label(band: DistanceBand) -> str:
    if band.max_distance is None:
        return f"{band.min_distance}+"
    return f"{band.min_distance}-{band.max_distance}"


class FareClassEarning(BaseModel):
    """Pre-authored earnings for a fare class, independent of distance."""

    qantas_points: int = Field(ge=0)
    status_credits: int = Field(ge=0)
    calculation_notes: str = ""

    model_config = {"frozen": True, "extra": "forbid"}


# --- Geographical Rule Configuration ---


class LocationType(str, Enum):
    """How a segment endpoint matched a configured location.

    Declaration order is matching priority.
    """

    AIRPORT = "airport"
    CITY = "city"
    COUNTRY = "country"
    REGION = "region"


class LocationMatch(BaseModel):
    """A resolved origin or destination."""

    type: LocationType
    value: str

    model_config = {"frozen": True}


def _normalize_key(location_type: LocationType, value: str) -> str:
    if location_type == LocationType.AIRPORT:
        return value.strip().upper()
    if location_type == LocationType.REGION:
        return value.strip()
    return value.strip().lower()


class OriginLocations(BaseModel):
    """Origin locations: membership only, no payload."""

    airport: Optional[tuple[str, ...]] = Field(
        default=None, validation_alias=AliasChoices("airport", "iata")
    )
    city: Optional[tuple[str, ...]] = None
    country: Optional[tuple[str, ...]] = None
    region: Optional[tuple[str, ...]] = None

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @field_validator("airport", "city", "country", "region", mode="before")
    @classmethod
    def as_sequence(cls, v):
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("airport", "city", "country", "region")
    @classmethod
    def normalize(cls, v: Optional[tuple[str, ...]], info: ValidationInfo):
        if v is None:
            return v
        location_type = LocationType(info.field_name)
        return tuple(dict.fromkeys(_normalize_key(location_type, value) for value in v))

    def locations(self, location_type: LocationType) -> Optional[tuple[str, ...]]:
        return getattr(self, location_type.value)


class DestinationLocations(BaseModel):
    """Destination locations: each value carries its earnings table."""

    airport: Optional[dict[str, EarningsTable]] = Field(
        default=None, validation_alias=AliasChoices("airport", "iata")
    )
    city: Optional[dict[str, EarningsTable]] = None
    country: Optional[dict[str, EarningsTable]] = None
    region: Optional[dict[str, EarningsTable]] = None

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @field_validator("airport", "city", "country", "region")
    @classmethod
    def normalize(cls, v: Optional[dict[str, EarningsTable]], info: ValidationInfo):
        if v is None:
            return v
        location_type = LocationType(info.field_name)
        normalized: dict[str, EarningsTable] = {}
        for key, table in v.items():
            normalized_key = _normalize_key(location_type, key)
            if normalized_key in normalized:
                raise ValueError(
                    f"Duplicate {location_type.value} destination {key!r} "
                    f"(normalized to {normalized_key!r})"
                )
            normalized[normalized_key] = table
        return normalized

    def locations(self, location_type: LocationType) -> Optional[dict[str, EarningsTable]]:
        return getattr(self, location_type.value)

    def earnings_for(self, location: LocationMatch) -> Optional[EarningsTable]:
        table = self.locations(location.type)
        if table is None:
            return None
        return table.get(location.value)


class GeographicalConfig(BaseModel):
    """Origin/destination pairing for a geographical rule."""

    origin: OriginLocations
    destination: DestinationLocations

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def both_sides_configured(self) -> "GeographicalConfig":
        if all(self.origin.locations(t) is None for t in LocationType):
            raise ValueError("origin must configure at least one location type")
        if all(self.destination.locations(t) is None for t in LocationType):
            raise ValueError("destination must configure at least one location type")
        return self


# --- Result Models ---


class CalculationResult(BaseModel):
    """Earnings for one segment under one rule."""

    rule: str
    rule_url: str = ""
    fare_earn_category: str
    notes: str
    qantas_points: int
    status_credits: int

    model_config = {"frozen": True}
