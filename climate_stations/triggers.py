# ============================================================================
# MODULE CONTEXT - CLIMATE STATION TRIGGERS
# ============================================================================
# STATUS: HTTP Triggers - Climate station search endpoints
# PURPOSE: Azure Functions HTTP triggers for station search and lookup
# EXPORTS: get_climate_triggers (returns list of trigger configurations)
# INTERFACES: Azure Functions HttpRequest/HttpResponse
# PYDANTIC_MODELS: StationSearchParameters, StationList
# DEPENDENCIES: azure.functions, pydantic, json, logging
# PATTERNS: Trigger Pattern, Factory Pattern (get_climate_triggers)
# ENTRY_POINTS: Function App route registration via get_climate_triggers()
# ============================================================================

"""
Climate Station HTTP Triggers

Endpoints:
- GET /api/climate/stations - Nearest stations to a point, or a name search
- GET /api/climate/stations/{station_id} - One station by id
"""

import json
import logging
from typing import Any, Dict, List, Optional

import azure.functions as func
from pydantic import ValidationError

from .exceptions import SearchParameterError, StationNotFoundError
from .models import StationSearchParameters
from .service import ClimateStationService

logger = logging.getLogger(__name__)

_service: Optional[ClimateStationService] = None


def get_climate_service() -> ClimateStationService:
    global _service
    if _service is None:
        _service = ClimateStationService()
    return _service


def get_climate_triggers() -> List[Dict[str, Any]]:
    """
    Get list of climate station trigger configurations for function_app.py.

    Returns:
        List of dicts with keys:
        - route: URL route pattern
        - methods: List of HTTP methods
        - handler: Callable trigger handler
    """
    return [
        {
            'route': 'climate/stations',
            'methods': ['GET'],
            'handler': StationSearchTrigger().handle
        },
        {
            'route': 'climate/stations/{station_id}',
            'methods': ['GET'],
            'handler': StationTrigger().handle
        }
    ]


class BaseClimateTrigger:
    """Common response helpers for climate triggers."""

    def __init__(self, service: Optional[ClimateStationService] = None):
        self._service = service

    @property
    def service(self) -> ClimateStationService:
        return self._service or get_climate_service()

    def _json_response(self, data: Dict[str, Any], status_code: int = 200) -> func.HttpResponse:
        return func.HttpResponse(
            body=json.dumps(data),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Content-Type-Options": "nosniff"}
        )

    def _error_response(
        self,
        message: str,
        status_code: int = 400,
        error_type: str = "BadRequest"
    ) -> func.HttpResponse:
        return func.HttpResponse(
            body=json.dumps({"code": error_type, "description": message}, indent=2),
            status_code=status_code,
            mimetype="application/json"
        )


class StationSearchTrigger(BaseClimateTrigger):
    """
    Station search trigger.

    Endpoint: GET /api/climate/stations

    Query Parameters:
        lat, lng: Search point in decimal degrees
        name: Case-insensitive name search, used when no point is given
        prefix: Match names by prefix instead of substring
        max: Number of stations to return
        interval: hourly, daily, monthly or almanac
        sort: distance, name, hourly, daily or monthly
    """

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        try:
            params = StationSearchParameters.from_query_params(req.params)
            result = self.service.search(params)
            return self._json_response(result.to_dict())

        except (SearchParameterError, ValidationError) as e:
            logger.warning(f"Invalid station search: {e}")
            return self._error_response(f"Failed to decode request: {e}", 400, "BadRequest")

        except StationNotFoundError as e:
            return self._error_response(str(e), 404, "NotFound")

        except Exception as e:
            logger.error(f"Error searching stations: {e}", exc_info=True)
            return self._error_response(
                message=f"Internal server error: {str(e)}",
                status_code=500,
                error_type="InternalServerError"
            )


class StationTrigger(BaseClimateTrigger):
    """
    Single station trigger.

    Endpoint: GET /api/climate/stations/{station_id}
    """

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        raw_id = req.route_params.get('station_id', '')

        try:
            station_id = int(raw_id)
        except ValueError:
            return self._error_response(f"Invalid station id: {raw_id!r}", 400, "BadRequest")

        try:
            return self._json_response(self.service.get_station(station_id).to_dict())

        except StationNotFoundError as e:
            logger.warning(f"Station not found: {station_id}")
            return self._error_response(str(e), 404, "NotFound")

        except Exception as e:
            logger.error(f"Error retrieving station {station_id}: {e}", exc_info=True)
            return self._error_response(
                message=f"Internal server error: {str(e)}",
                status_code=500,
                error_type="InternalServerError"
            )
