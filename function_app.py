# ============================================================================
# MODULE CONTEXT - AZURE FUNCTIONS ENTRY POINT
# ============================================================================
# STATUS: Core Infrastructure - Function App Entry Point
# PURPOSE: Main entry point for Azure Functions runtime with the wells and climate APIs
# EXPORTS: app (FunctionApp instance)
# DEPENDENCIES: azure-functions, water_wells, climate_stations, health
# ============================================================================

"""
Azure Functions Entry Point for the water wells API

Registers all HTTP triggers.

Architecture:
    - Water Wells API: 2 endpoints querying the provincial well databases
    - Climate Stations API: 2 endpoints searching the station inventory
    - Health checks: 2 endpoints for monitoring and APIM integration
        - /api/health - Public (minimal response for external callers)
        - /api/health/detailed - Internal (full metrics for APIM probes)

Deployment:
    - Local: func start
    - Azure: func azure functionapp publish <app-name> --python --build remote
"""

import atexit
import json
import logging

import azure.functions as func

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = func.FunctionApp()

# ============================================================================
# Water Wells API - 2 Endpoints
# ============================================================================

try:
    from water_wells import get_wells_triggers

    logger.info("Registering Water Wells API endpoints...")

    wells_triggers = get_wells_triggers()

    # Dataset listing
    @app.route(route="wells", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
    def wells_datasets(req: func.HttpRequest) -> func.HttpResponse:
        return wells_triggers[0]['handler'](req)

    # Wells query
    @app.route(route="wells/{dataset}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
    def wells_query(req: func.HttpRequest) -> func.HttpResponse:
        return wells_triggers[1]['handler'](req)

    logger.info("✅ Water Wells API registered successfully (2 endpoints)")

except ImportError as e:
    logger.warning(f"⚠️ Water Wells module not available: {e}")
    logger.warning("Water Wells API will not be available")

# ============================================================================
# Climate Stations API - 2 Endpoints
# ============================================================================

try:
    from climate_stations import get_climate_triggers

    logger.info("Registering Climate Stations API endpoints...")

    climate_triggers = get_climate_triggers()

    @app.route(route="climate/stations", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
    def climate_station_search(req: func.HttpRequest) -> func.HttpResponse:
        return climate_triggers[0]['handler'](req)

    @app.route(route="climate/stations/{station_id}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
    def climate_station(req: func.HttpRequest) -> func.HttpResponse:
        return climate_triggers[1]['handler'](req)

    logger.info("✅ Climate Stations API registered successfully (2 endpoints)")

except ImportError as e:
    logger.warning(f"⚠️ Climate Stations module not available: {e}")
    logger.warning("Climate Stations API will not be available")

# ============================================================================
# Health Check Endpoints - 2 Endpoints (Public + Detailed)
# ============================================================================

@app.route(route="health", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Public health check endpoint - minimal response for external callers.

    Always returns 200 - status in body indicates health.
    """
    from health import get_public_health

    result = get_public_health()

    return func.HttpResponse(
        json.dumps(result, default=str),
        mimetype="application/json",
        status_code=200,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
    )


@app.route(route="health/detailed", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def health_detailed(req: func.HttpRequest) -> func.HttpResponse:
    """
    Detailed health check endpoint - for APIM probes and operations.

    Returns 503 if unhealthy, 200 otherwise.

    SECURITY: Block this endpoint from external access via APIM policy.
    """
    from health import get_detailed_health, HealthStatus

    result = get_detailed_health()

    status_code = 503 if result["status"] == HealthStatus.UNHEALTHY.value else 200

    return func.HttpResponse(
        json.dumps(result, default=str, indent=2),
        mimetype="application/json",
        status_code=status_code,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"}
    )

# ============================================================================
# Application Startup
# ============================================================================

from config import validate_configuration
from health import get_app_identity
from infrastructure import close_connection_pools

_app_identity = get_app_identity()

try:
    validate_configuration()
except Exception as e:
    logger.error(f"⚠️ Database configuration invalid, dataset queries will fail: {e}")

atexit.register(close_connection_pools)

logger.info("="*60)
logger.info(f"{_app_identity['name']} - {_app_identity['description']}")
logger.info("="*60)
logger.info("Function App initialized successfully")
logger.info("Available endpoints:")
logger.info("  - GET /api/health - Public health check (minimal)")
logger.info("  - GET /api/health/detailed - Detailed health (APIM only)")
logger.info("")
logger.info("Water Wells API (2 endpoints):")
logger.info("  - GET /api/wells - List datasets and their filters")
logger.info("  - GET /api/wells/{dataset} - Query well coordinates")
logger.info("")
logger.info("Climate Stations API (2 endpoints):")
logger.info("  - GET /api/climate/stations - Nearest stations or name search")
logger.info("  - GET /api/climate/stations/{station_id} - Single station")
logger.info("="*60)
