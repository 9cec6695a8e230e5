"""
test_schema_contract.py — Tests for provider column availability checks

Uses an in-memory SQLite engine with a partially-migrated providers table.

Called by: pytest
Depends on: provider_dispatch.schema_contract, tests/conftest.py (sqlite_engine)
"""

from unittest.mock import patch

import pytest
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

from provider_dispatch import schema_contract
from provider_dispatch.schema_contract import (
    get_table_columns,
    has_columns,
    provider_column_availability,
    resolve_provider_email_column,
)
from provider_dispatch.schemas.eligibility import EligibilityCriteria, EligibilityReason
from provider_dispatch.services.capability_match import capability_input_from_provider
from provider_dispatch.services.eligibility_service import rank_providers


def _create_providers(engine, columns: str) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"CREATE TABLE providers (id TEXT PRIMARY KEY, {columns})"))


@pytest.fixture()
def warnings_log():
    records = []
    handler_id = logger.add(lambda m: records.append(m.record["message"]), level="WARNING")
    yield records
    logger.remove(handler_id)


class TestColumnAvailability:
    def test_partial_migration(self, sqlite_engine):
        _create_providers(sqlite_engine, "name TEXT, processes TEXT, country TEXT, email TEXT")
        availability = provider_column_availability(sqlite_engine)
        assert availability.processes is True
        assert availability.country is True
        assert availability.materials is False
        assert availability.states is False
        assert availability.contacted_at is False

    def test_missing_table_reports_nothing(self, sqlite_engine):
        assert get_table_columns(sqlite_engine, "providers") == frozenset()
        availability = provider_column_availability(sqlite_engine)
        assert availability.model_dump() == {
            "processes": False,
            "materials": False,
            "country": False,
            "states": False,
            "contacted_at": False,
        }

    def test_results_cached(self, sqlite_engine):
        _create_providers(sqlite_engine, "processes TEXT")
        assert "processes" in get_table_columns(sqlite_engine, "providers")
        with sqlite_engine.begin() as conn:
            conn.execute(text("ALTER TABLE providers ADD COLUMN materials TEXT"))
        assert "materials" not in get_table_columns(sqlite_engine, "providers")
        schema_contract.clear_schema_cache()
        assert "materials" in get_table_columns(sqlite_engine, "providers")

    def test_inspection_failure_is_not_cached(self, sqlite_engine, warnings_log):
        with patch.object(schema_contract, "inspect", side_effect=OperationalError("x", {}, Exception("boom"))):
            assert get_table_columns(sqlite_engine, "providers") == frozenset()
        assert any("Schema inspection failed" in m for m in warnings_log)
        _create_providers(sqlite_engine, "states TEXT")
        assert "states" in get_table_columns(sqlite_engine, "providers")


class TestEmailColumn:
    def test_priority(self, sqlite_engine):
        _create_providers(sqlite_engine, "contact_email TEXT, email TEXT")
        assert resolve_provider_email_column(sqlite_engine) == "email"

    def test_none_present(self, sqlite_engine):
        _create_providers(sqlite_engine, "name TEXT")
        assert resolve_provider_email_column(sqlite_engine) is None


class TestHasColumns:
    def test_present(self, sqlite_engine):
        _create_providers(sqlite_engine, "processes TEXT, materials TEXT")
        assert has_columns(sqlite_engine, "providers", ["processes", "materials"]) is True

    def test_missing_warns_once(self, sqlite_engine, warnings_log):
        _create_providers(sqlite_engine, "processes TEXT")
        assert has_columns(sqlite_engine, "providers", ["processes", "states"]) is False
        assert has_columns(sqlite_engine, "providers", ["states", "processes"]) is False
        assert len([m for m in warnings_log if "missing columns" in m]) == 1


class TestDataAccessFlow:
    def test_availability_feeds_ranking_and_capability(self, sqlite_engine, make_provider):
        _create_providers(sqlite_engine, "processes TEXT, states TEXT, contact_email TEXT")
        availability = provider_column_availability(sqlite_engine)
        email_column = resolve_provider_email_column(sqlite_engine)
        provider = make_provider("p1", processes=["cnc"], contact_email="rfq@shop.test")

        ranked = rank_providers(EligibilityCriteria(process="cnc"), [provider], email_column=email_column)
        assert ranked.ranked_providers[0].reasons == [
            EligibilityReason.PROCESS_MATCH,
            EligibilityReason.KNOWN_CONTACT,
        ]
        signals = capability_input_from_provider(provider, availability)
        assert signals.materials.available is False
        assert signals.processes.values == ["cnc"]

    def test_cache_is_per_engine(self, sqlite_engine):
        _create_providers(sqlite_engine, "processes TEXT")
        other = create_engine("sqlite://")
        try:
            assert "processes" in get_table_columns(sqlite_engine, "providers")
            assert get_table_columns(other, "providers") == frozenset()
        finally:
            other.dispose()
