# ============================================================================
# MODULE CONTEXT - INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Core Infrastructure - Database access
# PURPOSE: Shared PostgreSQL connection management for the dataset databases
# EXPORTS: PostgreSQLRepository, ManagedIdentityConnection, get_connection_pool, close_connection_pools
# DEPENDENCIES: psycopg, psycopg-pool, config
# ============================================================================

"""
Infrastructure Module

Pooled, read-only PostgreSQL access shared by every dataset repository.
"""

from .postgresql import (
    ManagedIdentityConnection,
    PostgreSQLRepository,
    close_connection_pools,
    get_connection_pool,
)

__version__ = "1.0.0"
__all__ = [
    "PostgreSQLRepository",
    "ManagedIdentityConnection",
    "get_connection_pool",
    "close_connection_pools"
]
