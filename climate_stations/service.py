"""
Climate station service.

Resolves search requests against the station inventory.
"""

from typing import Callable, Optional

from util_logger import ComponentType, LogContext, LoggerFactory, timed_operation

from .config import ClimateConfig, get_climate_config
from .exceptions import StationNotFoundError
from .inventory import StationInventory, load_inventory, sort_matches
from .models import SortBy, StationList, StationMatch, StationSearchParameters

logger = LoggerFactory.create_logger(
    ComponentType.SERVICE, "ClimateStationService", context=LogContext(operation="station_search")
)


class ClimateStationService:
    """
    Station search over the climate.weather.gc.ca inventory.

    Args:
        config: Climate configuration (uses singleton if not provided)
        inventory_loader: Returns the inventory. Defaults to reading config.inventory_path.
    """

    def __init__(self, config: Optional[ClimateConfig] = None,
                 inventory_loader: Optional[Callable[[], StationInventory]] = None):
        self.config = config or get_climate_config()
        self._inventory_loader = inventory_loader or (lambda: load_inventory(self.config.inventory_path))

    @property
    def inventory(self) -> StationInventory:
        return self._inventory_loader()

    def search(self, params: StationSearchParameters) -> StationList:
        """
        Raises:
            StationNotFoundError: Nothing matched
        """
        max_results = params.max or self.config.default_max

        with timed_operation(logger, "station_search", proximity=params.is_proximity) as dims:
            if params.is_proximity:
                matches = self.inventory.find(params.lat, params.lng, max_results, params.interval)
            else:
                matches = self._search_by_name(params, max_results)
            dims["matches"] = len(matches)

        if not matches:
            raise StationNotFoundError(self._describe(params))

        sort = params.sort or (SortBy.DISTANCE if params.is_proximity else None)
        if sort is not None:
            matches = sort_matches(matches, sort)

        return StationList(stations=matches, number_returned=len(matches))

    def _search_by_name(self, params: StationSearchParameters, max_results: int):
        if params.prefix:
            return self.inventory.name_starts_with(params.name, max_results, params.interval)
        return self.inventory.name_contains(params.name, max_results, params.interval)

    def get_station(self, station_id: int) -> StationMatch:
        station = self.inventory.station(station_id)
        if station is None:
            raise StationNotFoundError(f"station {station_id}")
        return StationMatch(station=station)

    @staticmethod
    def _describe(params: StationSearchParameters) -> str:
        if params.is_proximity:
            return f"({params.lat}, {params.lng})"
        return f"name '{params.name}'"
