# ============================================================================
# MODULE CONTEXT - CLIMATE STATIONS EXCEPTIONS
# ============================================================================
# STATUS: Core - Error taxonomy for the station search API
# PURPOSE: Exceptions raised by station models and the search service
# EXPORTS: ClimateStationsError, SearchParameterError, StationNotFoundError
# ============================================================================

"""
Climate station exceptions.

Triggers map these onto HTTP status codes:
    SearchParameterError -> 400
    StationNotFoundError -> 404
"""


class ClimateStationsError(Exception):
    """Base class for every station search error."""


class SearchParameterError(ClimateStationsError, ValueError):
    """A search parameter could not be decoded."""

    def __init__(self, parameter: str, value: str, reason: str):
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid value for '{parameter}': {value!r} ({reason})")


class StationNotFoundError(ClimateStationsError, LookupError):
    """No climate station matched a lookup or search."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No stations found for {query}")
