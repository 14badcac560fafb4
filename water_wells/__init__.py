# ============================================================================
# MODULE CONTEXT - WATER WELLS API MODULE
# ============================================================================
# STATUS: Module - Provincial water wells query API
# PURPOSE: Filter-to-SQL query engine over the provincial wells databases
# EXPORTS: WellsService, WellsConfig, get_wells_config, get_wells_triggers
# PYDANTIC_MODELS: WellsQueryParameters, WellsResponse
# DEPENDENCIES: psycopg, psycopg-pool, pydantic, rasterio, azure-functions
# SOURCE: One PostgreSQL database per province
# PATTERNS: Service Layer, Repository Pattern, Query Builder
# ENTRY_POINTS: from water_wells import get_wells_triggers
# ============================================================================

"""
Water Wells API

Serves well locations from the Alberta, British Columbia, Nova Scotia,
Ontario and Saskatchewan well databases through one query interface.
Clients filter by completion/abandonment date, yield, depth, depth to
bedrock and categorical attributes (status, use, colour, taste, odour),
and receive pages of [lat, lng] pairs.

Architecture:
    water_wells/
    ├── config.py       # Environment-based configuration
    ├── options.py      # Filter templates and request intents
    ├── predicates.py   # Intent -> SQL comparison
    ├── joins.py        # Join deduplication and ordering
    ├── pagination.py   # Adaptive page sizing
    ├── coordinates.py  # Row -> [lat, lng] projections
    ├── retriever.py    # Per-dataset query orchestration
    ├── repository.py   # Pooled PostgreSQL access
    ├── models.py       # Pydantic request/response models
    ├── service.py      # Business logic layer
    ├── triggers.py     # Azure Functions HTTP handlers
    └── datasets/       # One module per province
"""

from .config import WellsConfig, get_wells_config
from .service import WellsService
from .triggers import get_wells_triggers

__version__ = "1.0.0"
__all__ = [
    "WellsConfig",
    "WellsService",
    "get_wells_triggers",
    "get_wells_config"
]
