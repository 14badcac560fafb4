# ============================================================================
# MODULE CONTEXT - WATER WELLS MODELS
# ============================================================================
# STATUS: Models - Request decoding and response envelope
# PURPOSE: Pydantic models for wells query parameters and responses
# EXPORTS: TimeRange, NumberRange, WellsQueryParameters, WellsResponse, DatasetSummary, DatasetList
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, typing, datetime
# VALIDATION: Pydantic v2 validation
# PATTERNS: Data Transfer Objects (DTOs)
# ENTRY_POINTS: WellsQueryParameters.from_query_params(req.params)
# ============================================================================

"""
Water Wells API models.

Query string formats accepted by ``WellsQueryParameters.from_query_params``::

    completed.start=2019-01-01&completed.end=2020-06-30
    completed=2019-01-01/..             (ISO 8601 interval, '..' is open)
    rate=50:500   rate=50   rate.end=500
    status=supply,abandoned
    page=2&total=120000
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import RequestDecodeError
from .options import (
    CategoricalListOption,
    FilterOption,
    NumericRangeOption,
    TimeRangeOption,
)

TIME_FILTERS = ("completed", "abandoned")
NUMBER_FILTERS = ("rate", "depth", "bedrock")
LIST_FILTERS = ("status", "use", "colour", "taste", "odour")


class TimeRange(BaseModel):
    """Time range filter value. Either bound may be open."""
    start: Optional[datetime] = Field(default=None, description="Inclusive lower bound")
    end: Optional[datetime] = Field(default=None, description="Inclusive upper bound")


class NumberRange(BaseModel):
    """Integer range filter value. Zero means unset."""
    start: Optional[int] = Field(default=None, description="Inclusive lower bound")
    end: Optional[int] = Field(default=None, description="Inclusive upper bound")


class WellsQueryParameters(BaseModel):
    """
    Decoded client request for a wells dataset.

    ``page``, ``total`` and ``chunk`` are pagination hints. A positive
    ``total`` tells the server the client already knows the row count.
    """
    model_config = ConfigDict(extra="forbid")

    completed: Optional[TimeRange] = None
    abandoned: Optional[TimeRange] = None

    status: List[str] = Field(default_factory=list, description="Selected status categories")
    use: List[str] = Field(default_factory=list, description="Selected water use categories")
    colour: List[str] = Field(default_factory=list, description="Selected colour categories")
    taste: List[str] = Field(default_factory=list, description="Selected taste categories")
    odour: List[str] = Field(default_factory=list, description="Selected odour categories")

    rate: Optional[NumberRange] = None
    depth: Optional[NumberRange] = None
    bedrock: Optional[NumberRange] = None

    page: int = Field(default=1, ge=1, description="1-based page number")
    total: int = Field(default=0, ge=0, description="Known total row count")
    chunk: int = Field(default=0, ge=0, description="Known page size")

    @field_validator("page", mode="before")
    @classmethod
    def zero_page_is_first(cls, v: Any) -> Any:
        # Page 0 means no page was asked for
        return 1 if v == 0 else v

    @field_validator(*LIST_FILTERS, mode="before")
    @classmethod
    def split_categories(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "WellsQueryParameters":
        """
        Build from a flat query string mapping.

        Raises:
            RequestDecodeError: For unparseable number or interval values
            pydantic.ValidationError: For values pydantic rejects (dates, negative pages)
        """
        data: Dict[str, Any] = {}

        for name in TIME_FILTERS:
            bounds = _dotted_bounds(params, name)
            if name in params:
                bounds.update(_split_interval(name, params[name]))
            if bounds:
                data[name] = bounds

        for name in NUMBER_FILTERS:
            bounds = {}
            if name in params:
                bounds.update(_split_number_range(name, params[name]))
            for bound, raw in _dotted_bounds(params, name).items():
                bounds[bound] = _parse_int(f"{name}.{bound}", raw)
            if bounds:
                data[name] = bounds

        for name in LIST_FILTERS:
            if name in params:
                data[name] = params[name]

        for name in ("page", "total", "chunk"):
            if params.get(name):
                data[name] = _parse_int(name, params[name])

        return cls.model_validate(data)

    def to_overrides(self) -> Dict[str, FilterOption]:
        """Client values as bare filter options, keyed by filter name."""
        overrides: Dict[str, FilterOption] = {}
        for name in TIME_FILTERS:
            value: Optional[TimeRange] = getattr(self, name)
            if value is not None:
                overrides[name] = TimeRangeOption(start=value.start, end=value.end)
        for name in NUMBER_FILTERS:
            value = getattr(self, name)
            if value is not None:
                overrides[name] = NumericRangeOption(start=value.start, end=value.end)
        for name in LIST_FILTERS:
            selected = getattr(self, name)
            if selected:
                overrides[name] = CategoricalListOption(selected=tuple(selected))
        return overrides


def _dotted_bounds(params: Mapping[str, str], name: str) -> Dict[str, str]:
    bounds = {}
    for bound in ("start", "end"):
        raw = params.get(f"{name}.{bound}")
        if raw:
            bounds[bound] = raw
    return bounds


def _split_interval(name: str, raw: str) -> Dict[str, str]:
    parts = raw.split("/")
    if len(parts) > 2:
        raise RequestDecodeError(name, raw, "expected 'start/end'")
    bounds = {}
    if parts[0] and parts[0] != "..":
        bounds["start"] = parts[0]
    if len(parts) == 2 and parts[1] and parts[1] != "..":
        bounds["end"] = parts[1]
    return bounds


def _split_number_range(name: str, raw: str) -> Dict[str, int]:
    parts = raw.split(":")
    if len(parts) > 2:
        raise RequestDecodeError(name, raw, "expected 'start:end'")
    bounds = {}
    if parts[0]:
        bounds["start"] = _parse_int(name, parts[0])
    if len(parts) == 2 and parts[1]:
        bounds["end"] = _parse_int(name, parts[1])
    return bounds


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        raise RequestDecodeError(name, raw, "not an integer") from None


# ============================================================================
# Responses
# ============================================================================

class WellsResponse(BaseModel):
    """Response envelope for one page of well coordinates."""
    model_config = ConfigDict(populate_by_name=True)

    statement: str = Field(description="Executed SQL with parameters substituted")
    total: int = Field(description="Rows matching the filters")
    chunk: int = Field(description="Rows per page")
    page: int = Field(description="1-based page number")
    page_count: int = Field(alias="pageCount", description="Number of pages")
    data: List[List[float]] = Field(default_factory=list, description="[lat, lng] pairs")


class DatasetSummary(BaseModel):
    id: str
    title: str
    filters: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class DatasetList(BaseModel):
    datasets: List[DatasetSummary]
