# ============================================================================
# MODULE CONTEXT - WATER WELLS REPOSITORY
# ============================================================================
# STATUS: Data access - count, fetch and render for one dataset database
# PURPOSE: Execute retriever queries on the dataset's pooled connection
# EXPORTS: WellsRepository
# DEPENDENCIES: psycopg, infrastructure.postgresql, util_logger
# PATTERNS: Repository Pattern
# ============================================================================

"""
Water Wells repository.

Wraps PostgreSQLRepository with the three operations a Retriever needs.
Driver errors are logged and re-raised as RetrieverError so triggers can
answer 500 without knowing about psycopg.
"""

from typing import Any, Dict, List, Optional, Sequence

import psycopg
from psycopg import sql

from infrastructure.postgresql import PostgreSQLRepository
from util_logger import ComponentType, LoggerFactory, timed_operation

from .config import WellsConfig, get_wells_config
from .exceptions import RetrieverError


class WellsRepository(PostgreSQLRepository):
    """Read-only access to one provincial wells database."""

    def __init__(self, database: str, config: Optional[WellsConfig] = None, **kwargs):
        self.config = config or get_wells_config()
        super().__init__(
            database=self.config.database_name(database),
            schema_name=self.config.schema_name,
            statement_timeout=self.config.query_timeout_seconds,
            min_size=self.config.pool_min_size,
            max_size=self.config.pool_max_size,
            **kwargs
        )
        self.logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, f"WellsRepository.{database}")

    def count(self, query: sql.Composable, params: Sequence[Any]) -> int:
        """Run a ``SELECT COUNT(*) AS count`` query."""
        try:
            with timed_operation(self.logger, "count_wells", database=self.database) as dims:
                row = self._execute_query(query, tuple(params), fetch='one')
                dims['total'] = int(row['count']) if row else 0
                return dims['total']
        except psycopg.Error as e:
            self.logger.error(f"Count query failed on '{self.database}': {e}", exc_info=True)
            raise RetrieverError(f"Failed to count wells in '{self.database}': {e}") from e

    def fetch(self, query: sql.Composable, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """Fetch one page of rows as dicts."""
        try:
            with timed_operation(self.logger, "fetch_wells", database=self.database) as dims:
                rows = self._execute_query(query, tuple(params), fetch='all')
                dims['rows'] = len(rows)
                return rows
        except psycopg.Error as e:
            self.logger.error(f"Fetch query failed on '{self.database}': {e}", exc_info=True)
            raise RetrieverError(f"Failed to fetch wells from '{self.database}': {e}") from e

    def render(self, query: sql.Composable, params: Sequence[Any]) -> str:
        """Literal SQL with parameters merged in, for the response envelope."""
        try:
            statement = self._render_query(query, tuple(params))
        except psycopg.Error as e:
            self.logger.error(f"Rendering query failed on '{self.database}': {e}", exc_info=True)
            raise RetrieverError(f"Failed to render query for '{self.database}': {e}") from e
        self.logger.debug(statement)
        return statement
