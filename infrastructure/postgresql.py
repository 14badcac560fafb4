# ============================================================================
# MODULE CONTEXT - POSTGRESQL REPOSITORY
# ============================================================================
# STATUS: Core Infrastructure - PostgreSQL connection management
# PURPOSE: Pooled, read-only access to the per-province wells databases
# EXPORTS: PostgreSQLRepository, ManagedIdentityConnection, get_connection_pool, close_connection_pools
# DEPENDENCIES: psycopg, psycopg-pool, config
# SCOPE: Read-only database operations for API serving
# PATTERNS: Repository pattern, One pool per database, Managed identity
# ============================================================================

"""
PostgreSQL Repository - Read-Only Database Access

Each dataset database gets one ``psycopg_pool.ConnectionPool``. The pool is
created lazily the first time a repository for that database is used and
is shared by every request afterwards. Pools are safe for concurrent use.

Usage:
    from infrastructure.postgresql import PostgreSQLRepository

    repo = PostgreSQLRepository(database='alberta')
    with repo._get_cursor() as cursor:
        cursor.execute("SELECT 1")
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Sequence

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from config import get_app_config, get_postgres_connection_string, get_postgres_password

logger = logging.getLogger(__name__)

_pools: Dict[str, ConnectionPool] = {}
_pools_lock = threading.Lock()


class ManagedIdentityConnection(psycopg.Connection):
    """
    Connection that authenticates with a fresh Azure AD token.

    The pool opens connections long after startup (growth, recycling after
    ``max_lifetime``, reconnects), when a token baked into the conninfo
    would have expired.
    """

    @classmethod
    def connect(cls, conninfo: str = "", **kwargs):
        kwargs["password"] = get_postgres_password()
        return super().connect(conninfo, **kwargs)


def get_connection_pool(database: str, min_size: int = 1, max_size: int = 4) -> ConnectionPool:
    """
    Return the shared pool for a database, creating it on first use.

    Args:
        database: Database name
        min_size: Connections kept open
        max_size: Upper bound on concurrent connections
    """
    pool = _pools.get(database)
    if pool is not None:
        return pool

    with _pools_lock:
        pool = _pools.get(database)
        if pool is None:
            logger.info(f"Opening connection pool for database '{database}' (min={min_size}, max={max_size})")
            connection_class = (
                ManagedIdentityConnection if get_app_config().use_managed_identity else psycopg.Connection
            )
            pool = ConnectionPool(
                conninfo=get_postgres_connection_string(database),
                connection_class=connection_class,
                min_size=min_size,
                max_size=max_size,
                kwargs={"row_factory": dict_row},
                name=database,
                open=True,
            )
            _pools[database] = pool
    return pool


def close_connection_pools() -> None:
    """Close every open pool."""
    with _pools_lock:
        for name, pool in _pools.items():
            logger.info(f"Closing connection pool for database '{name}'")
            pool.close()
        _pools.clear()


class PostgreSQLRepository:
    """
    PostgreSQL repository base class with pooled connection management.

    Connection Strategy:
    -------------------
    Connections are borrowed from the database's shared pool for the
    duration of one operation and returned afterwards. The pool commits on
    success and rolls back on error.

    Example:
    -------
    ```python
    repo = PostgreSQLRepository(database='ontario', statement_timeout=30)
    rows = repo._execute_query(
        sql.SQL("SELECT COUNT(*) AS count FROM {}").format(sql.Identifier("qryWaterWellRecord")),
        fetch='one'
    )
    ```
    """

    def __init__(self, database: str, schema_name: Optional[str] = None,
                 statement_timeout: Optional[int] = None,
                 pool: Optional[ConnectionPool] = None,
                 min_size: int = 1, max_size: int = 4):
        """
        Initialize PostgreSQL repository.

        Parameters:
        ----------
        database : str
            Database holding the dataset.
        schema_name : Optional[str]
            Schema set as search_path on every borrowed connection. None keeps
            the server default.
        statement_timeout : Optional[int]
            Per-statement timeout in seconds.
        pool : Optional[ConnectionPool]
            Explicit pool. If not provided, the shared pool for ``database``.
        """
        self.database = database
        self.schema_name = schema_name
        self.statement_timeout = statement_timeout
        self._pool = pool
        self._min_size = min_size
        self._max_size = max_size

    @property
    def pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = get_connection_pool(self.database, self._min_size, self._max_size)
        return self._pool

    @contextmanager
    def _get_connection(self) -> Iterator[psycopg.Connection]:
        """
        Borrow a connection with session settings applied.

        Raises:
        ------
        psycopg.Error
            On connection failures (network, auth, pool timeout)
        """
        try:
            with self.pool.connection() as conn:
                with conn.cursor() as cursor:
                    if self.statement_timeout:
                        cursor.execute(
                            sql.SQL("SET statement_timeout = {}").format(
                                sql.Literal(f"{self.statement_timeout}s")
                            )
                        )
                    if self.schema_name:
                        cursor.execute(
                            sql.SQL("SET search_path TO {}").format(sql.Identifier(self.schema_name))
                        )
                yield conn
        except psycopg.Error as e:
            logger.error(f"PostgreSQL error on database '{self.database}': {e}")
            logger.error(f"  Error type: {type(e).__name__}")
            raise

    @contextmanager
    def _get_cursor(self, conn: Optional[psycopg.Connection] = None) -> Iterator[psycopg.Cursor]:
        """
        Context manager for cursors.

        With ``conn`` the caller controls the connection, otherwise one is
        borrowed from the pool for the cursor's lifetime.
        """
        if conn is not None:
            with conn.cursor() as cursor:
                yield cursor
        else:
            with self._get_connection() as conn:
                with conn.cursor() as cursor:
                    yield cursor

    def _execute_query(self, query: sql.Composable, params: Optional[Sequence[Any]] = None,
                       fetch: str = 'all') -> Any:
        """
        Execute a composed query and fetch its result.

        Parameters:
        ----------
        query : sql.Composable
            Query built with psycopg.sql composition.
        params : Optional[Sequence]
            Values for %s placeholders.
        fetch : str
            'one' or 'all'

        Raises:
        ------
        TypeError
            If query is not composed with psycopg.sql
        ValueError
            If fetch mode is invalid
        """
        if not isinstance(query, sql.Composable):
            raise TypeError(f"Query must be psycopg.sql composed, got {type(query)}")
        if fetch not in ('one', 'all'):
            raise ValueError(f"Invalid fetch mode: {fetch}")

        with self._get_cursor() as cursor:
            cursor.execute(query, params)
            if fetch == 'one':
                return cursor.fetchone()
            return cursor.fetchall()

    def _render_query(self, query: sql.Composable, params: Optional[Sequence[Any]] = None) -> str:
        """
        Merge parameters into the query text client-side.

        The result is for diagnostics only and is never executed.
        """
        with self._get_connection() as conn:
            with psycopg.ClientCursor(conn) as cursor:
                return cursor.mogrify(query, params)

    def _ping(self) -> Dict[str, Any]:
        """Run a trivial query, returning server version and current database."""
        row = self._execute_query(
            sql.SQL("SELECT version() AS version, current_database() AS database"),
            fetch='one'
        )
        return dict(row) if row else {}

    def _table_exists(self, table_name: str) -> bool:
        """Check if a table or view is visible on the search path."""
        quoted = '"' + table_name.replace('"', '""') + '"'
        row = self._execute_query(
            sql.SQL("SELECT to_regclass(%s) IS NOT NULL AS exists"),
            (quoted,),
            fetch='one'
        )
        return bool(row and row['exists'])
