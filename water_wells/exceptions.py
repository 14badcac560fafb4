# ============================================================================
# MODULE CONTEXT - WATER WELLS EXCEPTIONS
# ============================================================================
# STATUS: Core - Error taxonomy for the wells query API
# PURPOSE: Exceptions raised by options, retrievers and the service layer
# EXPORTS: WaterWellsError, UnsetFilterError, RequestDecodeError, DatasetNotFoundError,
#          RetrieverError
# ============================================================================

"""
Water Wells exceptions.

Triggers map these onto HTTP status codes:
    RequestDecodeError   -> 400
    DatasetNotFoundError -> 404
    RetrieverError       -> 500

UnsetFilterError never reaches a trigger. The retriever catches it and
omits the filter from the query.
"""


class WaterWellsError(Exception):
    """Base class for every wells query error."""


class UnsetFilterError(WaterWellsError):
    """A filter has no bounds or no selected categories."""

    def __init__(self, column: str, reason: str = "no bound specified"):
        self.column = column
        self.reason = reason
        super().__init__(f"Filter on '{column}' is unset: {reason}")


class RequestDecodeError(WaterWellsError, ValueError):
    """A client-supplied filter value could not be decoded."""

    def __init__(self, parameter: str, value: str, reason: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid value for '{parameter}': {value!r} ({reason})")


class DatasetNotFoundError(WaterWellsError, LookupError):
    """No dataset is registered under the requested slug."""

    def __init__(self, dataset: str):
        self.dataset = dataset
        super().__init__(f"Dataset '{dataset}' not found")


class RetrieverError(WaterWellsError):
    """The backing store failed while counting or fetching rows."""

