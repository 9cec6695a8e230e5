"""
conftest.py — Shared Test Fixtures for the dispatch engine

Provides provider/destination factories, an in-memory SQLite
engine for schema-contract checks, and a FastAPI TestClient.

Business Rules:
- Settings cache and schema cache are reset around every test

Called by: all test files via pytest autodiscovery
Depends on: provider_dispatch.main (app), provider_dispatch.schemas
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from provider_dispatch.config import get_settings
from provider_dispatch.schema_contract import clear_schema_cache
from provider_dispatch.schemas.eligibility import ProviderRecord
from provider_dispatch.schemas.sla import DestinationRecord


@pytest.fixture(autouse=True)
def _reset_caches():
    get_settings.cache_clear()
    clear_schema_cache()
    yield
    get_settings.cache_clear()
    clear_schema_cache()


@pytest.fixture()
def make_provider():
    """Factory: make_provider("p1", name="Acme", processes=["CNC"])"""
    def _make(provider_id: str, **overrides) -> ProviderRecord:
        data = {"id": provider_id, "name": f"Provider {provider_id}"}
        data.update(overrides)
        return ProviderRecord(**data)

    return _make


@pytest.fixture()
def make_destination():
    def _make(status: str, **overrides) -> DestinationRecord:
        return DestinationRecord(status=status, **overrides)

    return _make


@pytest.fixture()
def sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture()
def client():
    from provider_dispatch.main import app

    with TestClient(app) as c:
        yield c
