# ============================================================================
# MODULE CONTEXT - CLIMATE STATIONS MODULE
# ============================================================================
# STATUS: Module - climate.weather.gc.ca station search
# PURPOSE: Find weather stations near a well site, by name or by id
# EXPORTS: ClimateStationService, ClimateConfig, get_climate_config, get_climate_triggers
# DEPENDENCIES: pydantic, azure-functions
# SOURCE: Station inventory JSON file
# ENTRY_POINTS: from climate_stations import get_climate_triggers
# ============================================================================

"""
Climate Stations API

Architecture:
    climate_stations/
    ├── config.py     # Environment-based configuration
    ├── exceptions.py # Error taxonomy
    ├── models.py     # Station records and search requests
    ├── inventory.py  # In-memory inventory and search
    ├── service.py    # Business logic layer
    └── triggers.py   # Azure Functions HTTP handlers
"""

from .config import ClimateConfig, get_climate_config
from .service import ClimateStationService
from .triggers import get_climate_triggers

__all__ = [
    "ClimateConfig",
    "ClimateStationService",
    "get_climate_config",
    "get_climate_triggers"
]
