# ============================================================================
# MODULE CONTEXT - CLIMATE STATION INVENTORY
# ============================================================================
# STATUS: Core - In-memory station inventory and search
# PURPOSE: Nearest-station, name and id lookups over the station inventory
# EXPORTS: StationInventory, haversine_km, sort_matches, load_inventory
# DEPENDENCIES: pydantic, util_logger, json, heapq, math
# PATTERNS: Repository Pattern (read-only, file backed)
# ENTRY_POINTS: inventory = load_inventory(path); inventory.find(45.4, -75.7, 5)
# ============================================================================

"""
Climate station inventory.

The inventory is loaded once per process from a JSON array and searched in
memory. It holds a few thousand stations, so a linear scan per request is
fast enough.
"""

import heapq
import json
import logging
import math
import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter

from util_logger import ComponentType, log_exceptions

from .models import Interval, SortBy, StationMatch, StationMetadata

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

_station_list = TypeAdapter(List[StationMetadata])


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two WGS84 points in kilometres."""
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    n = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(dlng / 2) ** 2
    )
    return 2 * math.asin(math.sqrt(n)) * EARTH_RADIUS_KM


class StationInventory:
    """Read-only collection of climate stations."""

    def __init__(self, stations: Sequence[StationMetadata]):
        self._stations = list(stations)
        self._by_id: Dict[int, StationMetadata] = {}
        for station in self._stations:
            # First occurrence wins, matching a scan in file order
            self._by_id.setdefault(station.station_id, station)

    def __len__(self) -> int:
        return len(self._stations)

    @classmethod
    @log_exceptions(ComponentType.ADAPTER, "StationInventory")
    def from_file(cls, path: Path) -> "StationInventory":
        with open(path, "rb") as f:
            raw = json.load(f)
        stations = _station_list.validate_python(raw)
        logger.info(f"Loaded {len(stations)} climate stations from {path}")
        return cls(stations)

    def find(
        self,
        lat: float,
        lng: float,
        max_results: int,
        interval: Optional[Interval] = None,
    ) -> List[StationMatch]:
        """
        Nearest stations to a point, closest first.

        Args:
            lat, lng: Search point in decimal degrees
            max_results: Number of stations to return
            interval: When given, only stations with records for that interval
        """
        candidates = (
            (haversine_km(lat, lng, station.latitude, station.longitude), index, station)
            for index, station in enumerate(self._stations)
            if interval is None or station.reports(interval)
        )
        nearest = heapq.nsmallest(max_results, candidates, key=lambda c: (c[0], c[1]))
        return [StationMatch(station=station, distance=distance) for distance, _, station in nearest]

    def name_contains(self, query: str, max_results: int,
                      interval: Optional[Interval] = None) -> List[StationMatch]:
        needle = query.lower()
        return self._scan(lambda name: needle in name, max_results, interval)

    def name_starts_with(self, query: str, max_results: int,
                         interval: Optional[Interval] = None) -> List[StationMatch]:
        needle = query.lower()
        return self._scan(lambda name: name.startswith(needle), max_results, interval)

    def _scan(self, predicate, max_results: int, interval: Optional[Interval]) -> List[StationMatch]:
        matches: List[StationMatch] = []
        for station in self._stations:
            if interval is not None and not station.reports(interval):
                continue
            if predicate(station.name.lower()):
                matches.append(StationMatch(station=station))
                if len(matches) >= max_results:
                    break
        return matches

    def station(self, station_id: int) -> Optional[StationMetadata]:
        return self._by_id.get(station_id)


def sort_matches(matches: List[StationMatch], by: SortBy) -> List[StationMatch]:
    """
    Order search results.

    Interval sorts order by the length of the record (last year minus first
    year), shortest first.
    """
    if by == SortBy.DISTANCE:
        key = lambda m: m.distance if m.distance is not None else math.inf
    elif by == SortBy.NAME:
        key = lambda m: m.station.name
    elif by == SortBy.HOURLY:
        key = lambda m: _span(m.station.timeframe(Interval.HOURLY))
    elif by == SortBy.DAILY:
        key = lambda m: _span(m.station.timeframe(Interval.DAILY))
    elif by == SortBy.MONTHLY:
        key = lambda m: _span(m.station.timeframe(Interval.MONTHLY))
    else:
        raise TypeError(f"Unsupported sort: {by!r}")
    return sorted(matches, key=key)


def _span(timeframe: Tuple[int, int]) -> int:
    first, last = timeframe
    return last - first


_inventory_cache: Dict[Path, StationInventory] = {}
_inventory_lock = threading.Lock()


def load_inventory(path: Path) -> StationInventory:
    """Load an inventory file once per process."""
    with _inventory_lock:
        inventory = _inventory_cache.get(path)
        if inventory is None:
            inventory = StationInventory.from_file(path)
            _inventory_cache[path] = inventory
        return inventory
