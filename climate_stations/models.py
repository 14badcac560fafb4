# ============================================================================
# MODULE CONTEXT - CLIMATE STATIONS MODELS
# ============================================================================
# STATUS: Models - Station inventory records and search requests
# PURPOSE: Pydantic models for the climate.weather.gc.ca station inventory
# EXPORTS: Interval, SortBy, StationMetadata, StationSearchParameters, StationMatch, StationList
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, enum
# VALIDATION: Pydantic v2 validation
# PATTERNS: Data Transfer Objects (DTOs)
# ENTRY_POINTS: StationSearchParameters.from_query_params(req.params)
# ============================================================================

"""
Climate station models.

The inventory file uses the column headings of the published station
inventory ("Station ID", "Latitude (Decimal Degrees)", ...). Responses use
camelCase keys.
"""

from enum import Enum, IntEnum
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .exceptions import SearchParameterError


class Interval(IntEnum):
    """Observation interval a station publishes."""
    HOURLY = 1
    DAILY = 2
    MONTHLY = 3
    ALMANAC = 4

    @classmethod
    def parse(cls, value: Any) -> "Interval":
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text.isdigit():
            try:
                return cls(int(text))
            except ValueError:
                pass
        else:
            member = cls.__members__.get(text.upper())
            if member is not None:
                return member
        raise SearchParameterError("interval", text, "expected hourly, daily, monthly or almanac")


class SortBy(str, Enum):
    DISTANCE = "distance"
    NAME = "name"
    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"


class StationMetadata(BaseModel):
    """One row of the station inventory."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    name: str = Field(validation_alias="Name", serialization_alias="name")
    province: str = Field(default="", validation_alias="Province", serialization_alias="province")
    climate_id: Optional[str] = Field(default=None, validation_alias="Climate ID", exclude=True)
    station_id: int = Field(validation_alias="Station ID", serialization_alias="stationID")
    latitude: float = Field(validation_alias="Latitude (Decimal Degrees)", serialization_alias="latitude")
    longitude: float = Field(validation_alias="Longitude (Decimal Degrees)", serialization_alias="longitude")
    elevation: Optional[float] = Field(default=None, validation_alias="Elevation (m)", serialization_alias="elevation")
    first_year: int = Field(default=0, validation_alias="First Year", serialization_alias="firstYear")
    last_year: int = Field(default=0, validation_alias="Last Year", serialization_alias="lastYear")
    hourly_first_year: int = Field(default=0, validation_alias="HLY First Year", serialization_alias="hourlyFirstYear")
    hourly_last_year: int = Field(default=0, validation_alias="HLY Last Year", serialization_alias="hourlyLastYear")
    daily_first_year: int = Field(default=0, validation_alias="DLY First Year", serialization_alias="dailyFirstYear")
    daily_last_year: int = Field(default=0, validation_alias="DLY Last Year", serialization_alias="dailyLastYear")
    monthly_first_year: int = Field(default=0, validation_alias="MLY First Year", serialization_alias="monthlyFirstYear")
    monthly_last_year: int = Field(default=0, validation_alias="MLY Last Year", serialization_alias="monthlyLastYear")

    @field_validator(
        "first_year", "last_year",
        "hourly_first_year", "hourly_last_year",
        "daily_first_year", "daily_last_year",
        "monthly_first_year", "monthly_last_year",
        mode="before"
    )
    @classmethod
    def blank_year_is_zero(cls, v: Any) -> Any:
        # The inventory leaves years blank for intervals a station never reported
        if v is None or v == "":
            return 0
        return v

    @field_validator("climate_id", mode="before")
    @classmethod
    def climate_id_as_text(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def timeframe(self, interval: Interval) -> Tuple[int, int]:
        """First and last year of records for an interval."""
        if interval == Interval.HOURLY:
            return self.hourly_first_year, self.hourly_last_year
        if interval == Interval.DAILY:
            return self.daily_first_year, self.daily_last_year
        if interval == Interval.MONTHLY:
            return self.monthly_first_year, self.monthly_last_year
        return self.first_year, self.last_year

    def reports(self, interval: Interval) -> bool:
        first, last = self.timeframe(interval)
        return first != 0 and last != 0


class StationSearchParameters(BaseModel):
    """
    Decoded station search request.

    Either a point (``lat`` and ``lng``) or a ``name`` is required. With a
    point, the nearest ``max`` stations are returned. With a name, the
    first ``max`` stations whose name contains it (or starts with it, when
    ``prefix`` is set) are returned in inventory order.
    """
    model_config = ConfigDict(extra="forbid")

    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)
    name: Optional[str] = Field(default=None, min_length=1)
    prefix: bool = False
    max: Optional[int] = Field(default=None, ge=1, le=32767)
    interval: Optional[Interval] = None
    sort: Optional[SortBy] = None

    @field_validator("interval", mode="before")
    @classmethod
    def parse_interval(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        return Interval.parse(v)

    @field_validator("sort", mode="before")
    @classmethod
    def parse_sort(cls, v: Any) -> Any:
        if v is None or v == "":
            return None
        if isinstance(v, SortBy):
            return v
        try:
            return SortBy(str(v).strip().lower())
        except ValueError:
            raise SearchParameterError("sort", str(v), "expected distance, name, hourly, daily or monthly") from None

    @model_validator(mode="after")
    def validate_search_mode(self) -> "StationSearchParameters":
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be given together")
        if self.lat is None and self.name is None:
            raise ValueError("either lat and lng, or name, is required")
        if self.sort == SortBy.DISTANCE and self.lat is None:
            raise ValueError("sort=distance requires lat and lng")
        return self

    @property
    def is_proximity(self) -> bool:
        return self.lat is not None

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "StationSearchParameters":
        values = {key: value for key, value in params.items() if value != ""}
        if "prefix" in values:
            values["prefix"] = values["prefix"].lower() in ("1", "true", "yes")
        return cls(**values)


class StationMatch(BaseModel):
    """A station in a search result. ``distance`` is in kilometres."""
    station: StationMetadata
    distance: Optional[float] = None

    def to_dict(self) -> dict:
        result = self.station.model_dump(mode="json", by_alias=True)
        if self.distance is not None:
            result["distance"] = round(self.distance, 3)
        return result


class StationList(BaseModel):
    stations: List[StationMatch] = Field(default_factory=list)
    number_returned: int = 0

    def to_dict(self) -> dict:
        return {
            "stations": [match.to_dict() for match in self.stations],
            "numberReturned": self.number_returned,
        }
