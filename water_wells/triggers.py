# ============================================================================
# MODULE CONTEXT - WATER WELLS TRIGGERS
# ============================================================================
# STATUS: HTTP Triggers - Water wells query endpoints
# PURPOSE: Azure Functions HTTP triggers for dataset listing and wells queries
# EXPORTS: get_wells_triggers (returns list of trigger configurations)
# INTERFACES: Azure Functions HttpRequest/HttpResponse
# PYDANTIC_MODELS: WellsQueryParameters, WellsResponse
# DEPENDENCIES: azure.functions, pydantic, json, logging
# PATTERNS: Trigger Pattern, Factory Pattern (get_wells_triggers)
# ENTRY_POINTS: Function App route registration via get_wells_triggers()
# ============================================================================

"""
Water Wells HTTP Triggers

Endpoints:
- GET /api/wells - List datasets and the filters each supports
- GET /api/wells/{dataset} - Query one page of well coordinates

Integration:
    In function_app.py:

    from water_wells import get_wells_triggers

    for trigger in get_wells_triggers():
        app.route(
            route=trigger['route'],
            methods=trigger['methods'],
            auth_level=func.AuthLevel.ANONYMOUS
        )(trigger['handler'])
"""

import json
import logging
from typing import Any, Dict, List, Optional

import azure.functions as func
from pydantic import ValidationError

from .exceptions import DatasetNotFoundError, RequestDecodeError, RetrieverError
from .models import WellsQueryParameters
from .service import WellsService

logger = logging.getLogger(__name__)

_service: Optional[WellsService] = None


def get_wells_service() -> WellsService:
    """Shared service instance, so connection pools outlive single requests."""
    global _service
    if _service is None:
        _service = WellsService()
    return _service


def get_wells_triggers() -> List[Dict[str, Any]]:
    """
    Get list of wells API trigger configurations for function_app.py.

    Returns:
        List of dicts with keys:
        - route: URL route pattern
        - methods: List of HTTP methods
        - handler: Callable trigger handler
    """
    return [
        {
            'route': 'wells',
            'methods': ['GET'],
            'handler': WellsDatasetsTrigger().handle
        },
        {
            'route': 'wells/{dataset}',
            'methods': ['GET'],
            'handler': WellsQueryTrigger().handle
        }
    ]


# ============================================================================
# BASE TRIGGER CLASS
# ============================================================================

class BaseWellsTrigger:
    """Common response helpers for wells triggers."""

    def __init__(self, service: Optional[WellsService] = None):
        self._service = service

    @property
    def service(self) -> WellsService:
        return self._service or get_wells_service()

    def _json_response(self, data: Any, status_code: int = 200) -> func.HttpResponse:
        if hasattr(data, 'model_dump'):
            data = data.model_dump(mode='json', by_alias=True)

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
        error_body = {
            "code": error_type,
            "description": message
        }
        return func.HttpResponse(
            body=json.dumps(error_body, indent=2),
            status_code=status_code,
            mimetype="application/json"
        )


# ============================================================================
# ENDPOINT TRIGGERS
# ============================================================================

class WellsDatasetsTrigger(BaseWellsTrigger):
    """
    Dataset listing trigger.

    Endpoint: GET /api/wells
    """

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        try:
            return self._json_response(self.service.list_datasets())
        except Exception as e:
            logger.error(f"Error listing datasets: {e}", exc_info=True)
            return self._error_response(
                message=f"Internal server error: {str(e)}",
                status_code=500,
                error_type="InternalServerError"
            )


class WellsQueryTrigger(BaseWellsTrigger):
    """
    Wells query trigger.

    Endpoint: GET /api/wells/{dataset}

    Query Parameters:
        completed, abandoned: time ranges (name.start / name.end or name=start/end)
        rate, depth, bedrock: integer ranges (name=start:end or name.start / name.end)
        status, use, colour, taste, odour: comma separated categories
        page, total, chunk: pagination hints
    """

    def handle(self, req: func.HttpRequest) -> func.HttpResponse:
        dataset = req.route_params.get('dataset', '')

        try:
            params = WellsQueryParameters.from_query_params(req.params)
            response = self.service.query_wells(dataset, params)

            logger.info(
                f"Wells query on '{dataset}': page {response.page}/{response.page_count}, "
                f"{len(response.data)} of {response.total} wells"
            )
            return self._json_response(response)

        except DatasetNotFoundError as e:
            logger.warning(f"Unknown dataset requested: {dataset}")
            return self._error_response(str(e), 404, "NotFound")

        except (RequestDecodeError, ValidationError) as e:
            logger.warning(f"Invalid wells query for '{dataset}': {e}")
            return self._error_response(f"Failed to decode request: {e}", 400, "BadRequest")

        except RetrieverError as e:
            logger.error(f"Store failure for '{dataset}': {e}", exc_info=True)
            return self._error_response(str(e), 500, "InternalServerError")

        except Exception as e:
            logger.error(f"Error querying wells for '{dataset}': {e}", exc_info=True)
            return self._error_response(
                message=f"Internal server error: {str(e)}",
                status_code=500,
                error_type="InternalServerError"
            )
