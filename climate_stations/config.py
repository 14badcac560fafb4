# ============================================================================
# MODULE CONTEXT - CLIMATE STATIONS CONFIGURATION
# ============================================================================
# STATUS: Standalone Configuration - Climate station search
# PURPOSE: Inventory location and search defaults
# EXPORTS: ClimateConfig, get_climate_config, reset_climate_config
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables
# PATTERNS: Settings Pattern, Singleton via cached function
# ENTRY_POINTS: from climate_stations.config import get_climate_config
# ============================================================================

"""
Climate Stations Configuration

Environment Variables (all optional):
    - CLIMATE_STATION_INVENTORY: Path to the station inventory JSON
      (default: station-inventory.json beside this module)
    - CLIMATE_DEFAULT_MAX: Stations returned when ``max`` is omitted (default: 10)
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_INVENTORY_PATH = Path(__file__).parent / "station-inventory.json"


class ClimateConfig(BaseModel):
    """Configuration for the climate station search."""

    model_config = ConfigDict(validate_default=True)

    inventory_path: Path = Field(
        default_factory=lambda: Path(os.getenv("CLIMATE_STATION_INVENTORY", str(DEFAULT_INVENTORY_PATH))),
        description="climate.weather.gc.ca station inventory, as a JSON array"
    )
    default_max: int = Field(
        default_factory=lambda: int(os.getenv("CLIMATE_DEFAULT_MAX", "10")),
        ge=1,
        le=1000,
        description="Stations returned when the request gives no max"
    )


_config_cache: Optional[ClimateConfig] = None


def get_climate_config() -> ClimateConfig:
    """Get singleton climate configuration instance."""
    global _config_cache

    if _config_cache is None:
        _config_cache = ClimateConfig()

    return _config_cache


def reset_climate_config() -> None:
    global _config_cache
    _config_cache = None
