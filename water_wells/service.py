# ============================================================================
# MODULE CONTEXT - WATER WELLS SERVICE
# ============================================================================
# STATUS: Service - Wells query business logic
# PURPOSE: Resolve datasets, run retrievers and build response envelopes
# EXPORTS: WellsService
# PYDANTIC_MODELS: WellsQueryParameters, WellsResponse, DatasetList
# DEPENDENCIES: util_logger, water_wells.datasets, water_wells.repository
# SOURCE: Repository layer (WellsRepository)
# PATTERNS: Service Layer, Facade Pattern
# ENTRY_POINTS: service = WellsService(); response = service.query_wells("alberta", params)
# ============================================================================

"""
Water Wells Service - Business Logic Layer

Sits between the HTTP triggers and the retrievers. One repository is kept
per dataset so that the connection pool behind it is reused across
requests.
"""

import threading
from typing import Callable, Dict, Optional

from util_logger import ComponentType, LogContext, LoggerFactory, timed_operation

from .config import WellsConfig, get_wells_config
from .datasets import get_dataset, list_datasets
from .models import DatasetList, DatasetSummary, WellsQueryParameters, WellsResponse
from .repository import WellsRepository
from .retriever import WellsStore

logger = LoggerFactory.create_logger(
    ComponentType.SERVICE, "WellsService", context=LogContext(operation="query_wells")
)

StoreFactory = Callable[[str], WellsStore]


class WellsService:
    """
    Business logic service for the wells query API.

    Args:
        config: Wells configuration (uses singleton if not provided)
        store_factory: Builds the store for a database name. Defaults to WellsRepository.
    """

    def __init__(self, config: Optional[WellsConfig] = None,
                 store_factory: Optional[StoreFactory] = None):
        self.config = config or get_wells_config()
        self._store_factory = store_factory or (lambda database: WellsRepository(database, self.config))
        self._stores: Dict[str, WellsStore] = {}
        self._lock = threading.Lock()

    def _store(self, database: str) -> WellsStore:
        with self._lock:
            store = self._stores.get(database)
            if store is None:
                store = self._store_factory(database)
                self._stores[database] = store
            return store

    def list_datasets(self) -> DatasetList:
        return DatasetList(
            datasets=[DatasetSummary(**retriever.describe()) for retriever in list_datasets()]
        )

    def query_wells(self, dataset: str, params: WellsQueryParameters) -> WellsResponse:
        """
        Run one page of a wells query.

        Raises:
            DatasetNotFoundError: Unknown dataset slug
            RetrieverError: Store failure
        """
        retriever = get_dataset(dataset)
        store = self._store(retriever.database)

        with timed_operation(logger, "query_wells", dataset=retriever.slug, page=params.page) as dims:
            result = retriever.retrieve(
                store,
                overrides=params.to_overrides(),
                page=params.page,
                total=params.total,
            )
            dims.update(total=result.plan.total, chunk=result.plan.chunk, points=len(result.data))

        return WellsResponse(
            statement=result.statement,
            total=result.plan.total,
            chunk=result.plan.chunk,
            page=result.plan.page,
            page_count=result.plan.page_count,
            data=result.data,
        )
