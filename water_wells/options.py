# ============================================================================
# MODULE CONTEXT - FILTER OPTIONS
# ============================================================================
# STATUS: Core - Declarative per-column filters
# PURPOSE: Static filter templates, client overrides and request intents
# EXPORTS: FilterOption, TimeRangeOption, NumericRangeOption, CategoricalListOption,
#          RangeIntent, ListIntent, RequestIntent, FILTER_NAMES, is_null_sentinel,
#          format_timestamp
# DEPENDENCIES: stdlib only
# ============================================================================

"""
Filter options.

A dataset declares one option per recognized filter name. The declared
option is a template: it fixes the column, the mandatory constraints, the
joins and, for categorical filters, the category table. A client request
is decoded into bare options of the same variant that only carry values
(start/end or selected category names). ``merge`` combines the two into
a fresh option for the request.

Resolving a merged option produces a RequestIntent:

    TimeRangeOption / NumericRangeOption -> RangeIntent(start, end)
    CategoricalListOption                -> ListIntent(include, exclude)

An option with nothing to filter on raises UnsetFilterError.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import UnsetFilterError
from .joins import JoinSpec

# Recognized client filter names, in the order they are applied
FILTER_NAMES: Tuple[str, ...] = (
    "completed",
    "abandoned",
    "status",
    "use",
    "colour",
    "taste",
    "odour",
    "rate",
    "depth",
    "bedrock",
)

NULL_SENTINELS = ("NULL", "null")

UNPADDED_HOUR = "%-I"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def is_null_sentinel(value: Any) -> bool:
    """True for None and the literal strings 'NULL' / 'null'."""
    return value is None or (isinstance(value, str) and value in NULL_SENTINELS)


def format_timestamp(value: datetime, layout: str) -> str:
    """
    strftime plus ``%-I``, the 12-hour clock hour without zero padding
    (``3:04 PM``). Platform strftime does not support ``%-I`` everywhere.
    """
    if UNPADDED_HOUR in layout:
        layout = layout.replace(UNPADDED_HOUR, str(value.hour % 12 or 12))
    return value.strftime(layout)


# ============================================================================
# Request intents
# ============================================================================

@dataclass(frozen=True)
class RangeIntent:
    """Inclusive range. A None bound is open."""
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class ListIntent:
    """Raw values the client selected, and the raw values of every other category."""
    include: Tuple[Any, ...] = ()
    exclude: Tuple[Any, ...] = ()

    @property
    def has_null(self) -> bool:
        return any(is_null_sentinel(v) for v in (*self.include, *self.exclude))


RequestIntent = Union[RangeIntent, ListIntent]


# ============================================================================
# Options
# ============================================================================

@dataclass(frozen=True)
class FilterOption:
    """
    Base option. Used directly, it is a disabled filter: the dataset knows
    the filter name but has no column for it.
    """
    column: Optional[str] = None
    required: Mapping[str, Any] = field(default_factory=dict)
    joins: Tuple[JoinSpec, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.column)

    def merge(self, override: Optional["FilterOption"]) -> "FilterOption":
        return self

    def request(self) -> RequestIntent:
        raise UnsetFilterError(self.column or "<disabled>", "filter is not available for this dataset")

    def describe(self) -> Dict[str, Any]:
        """Summary of the option for the dataset listing endpoint."""
        return {"type": "disabled"}


@dataclass(frozen=True)
class TimeRangeOption(FilterOption):
    """
    Time range on a column stored as text.

    ``layout`` is a strftime format matching how the column stores
    timestamps, e.g. ``"%Y.%m.%d"`` for ``1973.10.28``.
    """
    layout: str = "%Y-%m-%d"
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def merge(self, override: Optional["FilterOption"]) -> "TimeRangeOption":
        if not isinstance(override, TimeRangeOption):
            return replace(self, start=None, end=None)
        return replace(self, start=override.start, end=override.end)

    def _format(self, value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        aware = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
        if aware == _EPOCH:
            return None
        return format_timestamp(value, self.layout)

    def request(self) -> RangeIntent:
        start, end = self._format(self.start), self._format(self.end)
        if start is None and end is None:
            raise UnsetFilterError(self.column)
        return RangeIntent(start=start, end=end)

    def describe(self) -> Dict[str, Any]:
        return {"type": "time", "column": self.column}


@dataclass(frozen=True)
class NumericRangeOption(FilterOption):
    """Integer range. Zero counts as unset."""
    start: Optional[int] = None
    end: Optional[int] = None

    def merge(self, override: Optional["FilterOption"]) -> "NumericRangeOption":
        if not isinstance(override, NumericRangeOption):
            return replace(self, start=None, end=None)
        return replace(self, start=override.start, end=override.end)

    def request(self) -> RangeIntent:
        start = self.start or None
        end = self.end or None
        if start is None and end is None:
            raise UnsetFilterError(self.column)
        return RangeIntent(start=start, end=end)

    def describe(self) -> Dict[str, Any]:
        return {"type": "number", "column": self.column}


@dataclass(frozen=True)
class CategoricalListOption(FilterOption):
    """
    Category filter.

    ``items`` maps a category name to the raw column values it covers. The
    mapping is ordered, and resolution walks it in declaration order.
    """
    items: Mapping[str, Sequence[Any]] = field(default_factory=dict)
    multiple: bool = False
    selected: Tuple[str, ...] = ()

    def merge(self, override: Optional["FilterOption"]) -> "CategoricalListOption":
        if not isinstance(override, CategoricalListOption):
            return replace(self, selected=())
        return replace(self, selected=tuple(override.selected))

    def request(self) -> ListIntent:
        if not self.selected:
            raise UnsetFilterError(self.column, "no category selected")

        remaining = list(self.selected)
        include: list = []
        exclude: list = []
        for name, values in self.items.items():
            if name in remaining:
                include.extend(values)
                remaining.remove(name)
                if not self.multiple:
                    break
                continue
            exclude.extend(values)

        return ListIntent(include=tuple(include), exclude=tuple(exclude))

    def describe(self) -> Dict[str, Any]:
        return {
            "type": "list",
            "column": self.column,
            "multiple": self.multiple,
            "categories": list(self.items),
        }
