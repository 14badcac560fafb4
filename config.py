# ============================================================================
# MODULE CONTEXT - APPLICATION CONFIGURATION
# ============================================================================
# STATUS: Core Infrastructure - Configuration Management
# PURPOSE: PostgreSQL connection settings shared by every dataset database
# EXPORTS: AppConfig, get_app_config, get_postgres_connection_string, get_postgres_password, validate_configuration
# DEPENDENCIES: pydantic-settings, azure-identity
# SOURCE: Environment variables, .env file, Azure managed identity
# PATTERNS: Singleton pattern for config, lazy initialization for credentials
# ============================================================================

"""
Application Configuration Module

Every provincial wells dataset lives in its own PostgreSQL database on the
same server. The server, credentials and authentication mode are configured
once here. The dataset modules name the database they read from, and the
connection string is built per database.

Authentication Modes:
    1. Password-based (local development):
       - Requires: POSTGIS_HOST, POSTGIS_USER, POSTGIS_PASSWORD
       - Use when: USE_MANAGED_IDENTITY=false or not set

    2. Managed Identity (Azure production):
       - Requires: System-assigned managed identity enabled
       - Use when: USE_MANAGED_IDENTITY=true

Usage:
    from config import get_postgres_connection_string

    conn_string = get_postgres_connection_string("alberta")
"""

import logging
from functools import lru_cache
from typing import Optional
from urllib.parse import quote_plus

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Scope for Azure Database for PostgreSQL tokens
POSTGRES_TOKEN_SCOPE = "https://ossrdbms-aad.database.windows.net/.default"


# ============================================================================
# Application Configuration
# ============================================================================

class AppConfig(BaseSettings):
    """
    Application-wide configuration loaded from environment variables.

    Attributes:
        postgis_host: PostgreSQL server hostname
        postgis_port: PostgreSQL server port
        postgis_database: Default database (used when a caller names none)
        postgis_user: Database username
        postgis_password: Database password (optional with managed identity)
        postgis_sslmode: libpq sslmode
        use_managed_identity: Enable Azure managed identity authentication
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    postgis_host: str = Field(..., description="PostgreSQL hostname")
    postgis_port: int = Field(default=5432, description="PostgreSQL port")
    postgis_database: str = Field(default="postgres", description="Default database name")
    postgis_user: str = Field(..., description="Database username")
    postgis_password: Optional[str] = Field(default=None, description="Database password")
    postgis_sslmode: str = Field(default="require", description="libpq sslmode")

    use_managed_identity: bool = Field(
        default=False,
        description="Use Azure managed identity for authentication"
    )

    @model_validator(mode="after")
    def validate_password(self) -> "AppConfig":
        """Ensure password is provided when not using managed identity."""
        if not self.use_managed_identity and not self.postgis_password:
            raise ValueError(
                "POSTGIS_PASSWORD is required when USE_MANAGED_IDENTITY=false"
            )
        return self


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    """
    Get singleton application configuration instance.

    Raises:
        ValidationError: If required environment variables are missing
    """
    return AppConfig()


# ============================================================================
# PostgreSQL Connection String Generation
# ============================================================================

def get_postgres_connection_string(database: Optional[str] = None) -> str:
    """
    Generate a PostgreSQL connection string for one database.

    With managed identity the password is left out: Azure AD tokens expire,
    so a fresh one is passed on every connect (see get_postgres_password).

    Args:
        database: Database name. Falls back to POSTGIS_DATABASE.

    Returns:
        str: PostgreSQL connection string (psycopg format)
    """
    config = get_app_config()
    database = database or config.postgis_database

    if config.use_managed_identity:
        credentials = quote_plus(config.postgis_user)
    else:
        # URL-encode password to handle special characters like @
        credentials = f"{quote_plus(config.postgis_user)}:{quote_plus(config.postgis_password)}"

    return (
        f"postgresql://{credentials}"
        f"@{config.postgis_host}:{config.postgis_port}"
        f"/{quote_plus(database)}"
        f"?sslmode={config.postgis_sslmode}"
    )


def get_postgres_password() -> str:
    """
    Password for a new connection.

    Raises:
        ValueError: If managed identity token acquisition fails
    """
    config = get_app_config()
    if config.use_managed_identity:
        return _acquire_managed_identity_token(config)
    return config.postgis_password


def _acquire_managed_identity_token(config: AppConfig) -> str:
    """
    Acquire an Azure AD access token for the system-assigned identity.

    Tokens expire after roughly an hour, so one is requested for every
    new connection.
    """
    from azure.identity import DefaultAzureCredential

    logger.info(f"Acquiring managed identity token for {config.postgis_host}")
    try:
        token = DefaultAzureCredential().get_token(POSTGRES_TOKEN_SCOPE)
    except Exception as e:
        logger.error(f"Failed to acquire managed identity token: {e}")
        raise ValueError(
            f"Managed identity authentication failed: {e}. "
            "Ensure system-assigned managed identity is enabled and has database permissions."
        ) from e

    return token.token


# ============================================================================
# Configuration Validation
# ============================================================================

def validate_configuration() -> bool:
    """
    Validate configuration on application startup.

    Raises:
        Exception: If configuration validation fails
    """
    try:
        config = get_app_config()
        logger.info("Configuration validation:")
        logger.info(f"  PostgreSQL Host: {config.postgis_host}")
        logger.info(f"  PostgreSQL Port: {config.postgis_port}")
        logger.info(f"  User: {config.postgis_user}")
        logger.info(f"  Managed Identity: {config.use_managed_identity}")
        get_postgres_connection_string()
        get_postgres_password()
        logger.info("Connection credentials resolved successfully")
        return True
    except Exception as e:
        logger.error(f"Configuration validation failed: {e}")
        raise
