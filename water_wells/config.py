# ============================================================================
# MODULE CONTEXT - WATER WELLS CONFIGURATION
# ============================================================================
# STATUS: Standalone Configuration - Water Wells query API
# PURPOSE: Query, pool and database naming settings for the wells datasets
# EXPORTS: WellsConfig, get_wells_config, reset_wells_config
# INTERFACES: Pydantic BaseModel
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables (connection credentials live in config.py)
# PATTERNS: Settings Pattern, Singleton via cached function
# ENTRY_POINTS: from water_wells.config import get_wells_config
# ============================================================================

"""
Water Wells API Configuration

Environment Variables (all optional):
    - WELLS_QUERY_TIMEOUT: Statement timeout in seconds (default: 60)
    - WELLS_POOL_MIN_SIZE: Connections kept open per database (default: 1)
    - WELLS_POOL_MAX_SIZE: Connections allowed per database (default: 4)
    - WELLS_SCHEMA: Schema holding the dataset tables (default: server search_path)
    - WELLS_DATABASE_PREFIX: Prefix added to every dataset database name (default: "")
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class WellsConfig(BaseModel):
    """Configuration for the water wells query API."""

    # Environment-derived defaults go through the same bounds as explicit values
    model_config = ConfigDict(validate_default=True)

    query_timeout_seconds: int = Field(
        default_factory=lambda: int(os.getenv("WELLS_QUERY_TIMEOUT", "60")),
        ge=1,
        le=600,
        description="Maximum query execution time in seconds"
    )
    pool_min_size: int = Field(
        default_factory=lambda: int(os.getenv("WELLS_POOL_MIN_SIZE", "1")),
        ge=0,
        description="Connections kept open per dataset database"
    )
    pool_max_size: int = Field(
        default_factory=lambda: int(os.getenv("WELLS_POOL_MAX_SIZE", "4")),
        ge=1,
        description="Upper bound on connections per dataset database"
    )
    schema_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("WELLS_SCHEMA") or None,
        description="Schema holding the dataset tables"
    )
    database_prefix: str = Field(
        default_factory=lambda: os.getenv("WELLS_DATABASE_PREFIX", ""),
        description="Prefix added to every dataset database name"
    )

    @field_validator("database_prefix")
    @classmethod
    def strip_prefix(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> "WellsConfig":
        if self.pool_min_size > self.pool_max_size:
            raise ValueError(
                f"WELLS_POOL_MIN_SIZE ({self.pool_min_size}) exceeds WELLS_POOL_MAX_SIZE ({self.pool_max_size})"
            )
        return self

    def database_name(self, database: str) -> str:
        """Physical database name for a dataset."""
        return f"{self.database_prefix}{database}"


# Singleton instance cache
_config_cache: Optional[WellsConfig] = None


def get_wells_config() -> WellsConfig:
    """Get singleton wells configuration instance."""
    global _config_cache

    if _config_cache is None:
        _config_cache = WellsConfig()

    return _config_cache


def reset_wells_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config_cache
    _config_cache = None
