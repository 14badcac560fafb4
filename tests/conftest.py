"""Shared fixtures for the water wells API tests."""

from typing import Any, Dict, Optional
from unittest.mock import MagicMock

import azure.functions as func
import pytest
from psycopg import sql

from config import get_app_config
from water_wells.config import WellsConfig, reset_wells_config
from climate_stations.config import reset_climate_config


def render(composable: sql.Composable) -> str:
    """SQL text of a composed query without a database connection."""
    return composable.as_string(None)


@pytest.fixture(autouse=True)
def database_env(monkeypatch):
    monkeypatch.setenv("POSTGIS_HOST", "localhost")
    monkeypatch.setenv("POSTGIS_USER", "wells")
    monkeypatch.setenv("POSTGIS_PASSWORD", "p@ss word")
    monkeypatch.delenv("USE_MANAGED_IDENTITY", raising=False)
    get_app_config.cache_clear()
    reset_wells_config()
    reset_climate_config()
    yield
    get_app_config.cache_clear()
    reset_wells_config()
    reset_climate_config()


@pytest.fixture
def wells_config() -> WellsConfig:
    return WellsConfig(
        query_timeout_seconds=30,
        pool_min_size=1,
        pool_max_size=2,
        schema_name=None,
        database_prefix="",
    )


@pytest.fixture
def fake_store():
    """Store double with count, fetch and render."""
    store = MagicMock()
    store.count.return_value = 0
    store.fetch.return_value = []
    store.render.side_effect = lambda query, params: f"{render(query)} -- {list(params)}"
    return store


@pytest.fixture
def make_request():
    def _make(url: str, params: Optional[Dict[str, str]] = None,
              route_params: Optional[Dict[str, Any]] = None) -> func.HttpRequest:
        return func.HttpRequest(
            method="GET",
            url=url,
            params=params or {},
            route_params=route_params or {},
            body=b"",
        )
    return _make
