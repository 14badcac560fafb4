# ============================================================================
# MODULE CONTEXT - HEALTH CHECK MODULE
# ============================================================================
# STATUS: Core Infrastructure - Health Monitoring
# PURPOSE: Health checks for APIM integration and monitoring
# EXPORTS: get_public_health, get_detailed_health, get_app_identity, HealthStatus, CheckResult
# DEPENDENCIES: psycopg, config, util_logger, water_wells, climate_stations
# PATTERNS: Two-tier health checks (public/detailed) for APIM
# ============================================================================

"""
Health Check Module for the water wells API

Two tiers:

1. Public Health (/api/health):
   - Status and timestamp only
   - Always returns 200 (status in body indicates health)

2. Detailed Health (/api/health/detailed):
   - Connectivity and latency for every dataset database
   - Presence of each dataset's primary table
   - Climate station inventory and API module status
   - Returns 503 if unhealthy

Status rules:
    every dataset database reachable           -> healthy
    some dataset databases unreachable         -> degraded
    no dataset database reachable              -> unhealthy
    non-critical check failing (inventory, modules) -> degraded

Usage:
    from health import get_public_health, get_detailed_health

    result = get_public_health()
    # {"status": "healthy", "timestamp": "2026-01-12T12:00:00+00:00"}
"""

import time
import uuid
from enum import Enum
from datetime import datetime, timezone
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple

import psycopg

from config import get_app_config
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.HEALTH, "HealthService")


# ============================================================================
# Health Status Enum
# ============================================================================

class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"      # Non-critical components or some datasets failing
    UNHEALTHY = "unhealthy"    # No dataset reachable


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class CheckResult:
    """Result of a single health check."""
    status: str              # "pass" or "fail"
    latency_ms: float
    message: str
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result = {
            "status": self.status,
            "latency_ms": round(self.latency_ms, 2),
            "message": self.message
        }
        if self.details:
            result["details"] = self.details
        return result


# ============================================================================
# Application Identity
# ============================================================================

APP_NAME = "water-wells-api"
APP_DESCRIPTION = "Provincial Water Wells & Climate Stations API"


def get_app_identity() -> Dict[str, str]:
    """Name and description reported by health checks and startup logging."""
    return {"name": APP_NAME, "description": APP_DESCRIPTION}


# ============================================================================
# Health Check Functions
# ============================================================================

def check_dataset_database(slug: str, database: str, table: str) -> CheckResult:
    """
    Check one dataset database.

    Pings the server through the dataset's pool and confirms the primary
    table is visible on the search path.
    """
    from water_wells.repository import WellsRepository

    start_time = time.perf_counter()

    try:
        repo = WellsRepository(database)
        server = repo._ping()
        table_exists = repo._table_exists(table)
        latency_ms = (time.perf_counter() - start_time) * 1000

        if not table_exists:
            return CheckResult(
                status="fail",
                latency_ms=latency_ms,
                message=f"Table '{table}' not found",
                details={"dataset": slug, "database": repo.database, "table": table, "exists": False}
            )

        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message="PostgreSQL connection successful",
            details={
                "dataset": slug,
                "database": server.get("database", repo.database),
                "table": table
            }
        )

    except (psycopg.Error, OSError, ValueError) as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Database check failed for dataset '{slug}': {e}")

        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Database connection failed: {type(e).__name__}",
            details={"dataset": slug, "error": str(e)}
        )


def check_all_datasets() -> Tuple[Dict[str, CheckResult], List[str]]:
    """Run check_dataset_database for every registered dataset. Returns results and failures."""
    from water_wells.datasets import list_datasets

    results: Dict[str, CheckResult] = {}
    failures: List[str] = []
    for retriever in list_datasets():
        result = check_dataset_database(retriever.slug, retriever.database, retriever.table)
        results[retriever.slug] = result
        if result.status == "fail":
            failures.append(retriever.slug)
    return results, failures


def check_station_inventory() -> CheckResult:
    """
    Check the climate station inventory loads.

    This is a non-critical check - failure means DEGRADED status.
    """
    from climate_stations.config import get_climate_config
    from climate_stations.inventory import load_inventory

    start_time = time.perf_counter()
    config = get_climate_config()

    try:
        inventory = load_inventory(config.inventory_path)
        latency_ms = (time.perf_counter() - start_time) * 1000
        return CheckResult(
            status="pass",
            latency_ms=latency_ms,
            message=f"{len(inventory)} stations loaded",
            details={"path": str(config.inventory_path), "station_count": len(inventory)}
        )

    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"Station inventory check failed: {e}")
        return CheckResult(
            status="fail",
            latency_ms=latency_ms,
            message=f"Station inventory unavailable: {type(e).__name__}",
            details={"path": str(config.inventory_path), "error": str(e)}
        )


def check_api_modules() -> CheckResult:
    """
    Check API module availability.

    This is a non-critical check - failure means DEGRADED status.
    """
    start_time = time.perf_counter()

    wells_status = {"available": False, "endpoints": 0}
    climate_status = {"available": False, "endpoints": 0}

    try:
        from water_wells import get_wells_triggers
        from water_wells.datasets import DATASETS
        wells_status = {
            "available": True,
            "endpoints": len(get_wells_triggers()),
            "datasets": sorted(DATASETS)
        }
    except Exception as e:
        wells_status["error"] = str(e)

    try:
        from climate_stations import get_climate_triggers
        climate_status = {
            "available": True,
            "endpoints": len(get_climate_triggers())
        }
    except Exception as e:
        climate_status["error"] = str(e)

    latency_ms = (time.perf_counter() - start_time) * 1000

    if wells_status["available"] and climate_status["available"]:
        message = "All modules loaded"
        status = "pass"
    elif wells_status["available"] or climate_status["available"]:
        message = "Some modules unavailable"
        status = "pass"  # Partial availability is still a pass
    else:
        message = "No API modules available"
        status = "fail"

    return CheckResult(
        status=status,
        latency_ms=latency_ms,
        message=message,
        details={
            "water_wells": wells_status,
            "climate_stations": climate_status
        }
    )


def _overall_status(dataset_failures: List[str], dataset_count: int,
                    non_critical_failures: List[str]) -> HealthStatus:
    if dataset_count and len(dataset_failures) == dataset_count:
        return HealthStatus.UNHEALTHY
    if dataset_failures or non_critical_failures:
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


# ============================================================================
# Main Entry Points
# ============================================================================

def get_public_health() -> Dict[str, Any]:
    """
    Get minimal health status for public endpoint.

    Returns only status and timestamp - no internal details.
    """
    start_time = time.perf_counter()

    results, failures = check_all_datasets()
    status = _overall_status(failures, len(results), [])

    total_duration = (time.perf_counter() - start_time) * 1000

    logger.info("Public health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'public'
        }
    })

    return {
        "status": status.value,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


def get_detailed_health() -> Dict[str, Any]:
    """
    Get detailed health status for APIM probes and operations.

    SECURITY NOTE: Block this endpoint from external access via APIM policy.
    """
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())[:8]

    checks: Dict[str, Any] = {}
    non_critical_failures: List[str] = []

    results, dataset_failures = check_all_datasets()
    checks["datasets"] = {slug: result.to_dict() for slug, result in results.items()}

    inventory_result = check_station_inventory()
    checks["station_inventory"] = inventory_result.to_dict()
    if inventory_result.status == "fail":
        non_critical_failures.append("station_inventory")

    modules_result = check_api_modules()
    checks["api_modules"] = modules_result.to_dict()
    if modules_result.status == "fail":
        non_critical_failures.append("api_modules")

    status = _overall_status(dataset_failures, len(results), non_critical_failures)

    total_duration = (time.perf_counter() - start_time) * 1000

    try:
        config = get_app_config()
        connection = {
            "host": config.postgis_host,
            "auth_mode": "managed_identity" if config.use_managed_identity else "password"
        }
    except ValueError as e:
        connection = {"error": str(e)}

    logger.info("Detailed health check completed", extra={
        'custom_dimensions': {
            'status': status.value,
            'duration_ms': round(total_duration, 2),
            'check_type': 'detailed',
            'request_id': request_id,
            'dataset_failures': dataset_failures,
            'non_critical_failures': non_critical_failures
        }
    })

    return {
        "status": status.value,
        "app": APP_NAME,
        "description": APP_DESCRIPTION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "connection": connection,
        "checks": checks,
        "total_duration_ms": round(total_duration, 2)
    }
