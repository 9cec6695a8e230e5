"""
schema_contract.py — Column availability checks against the record store.

The surrounding system tolerates partially-migrated schemas, so the engine
needs to know which provider columns exist before it can tell "not
migrated yet" apart from "provider left it blank".

Business Rules:
- Missing table → every column reported unavailable (never raises)
- Inspections are cached per (engine, table) until clear_schema_cache()
  or until the engine is garbage collected
- Each missing-column combination is warned about once per cache lifetime

This module is public API for the data-access layer. The HTTP app works on
already-fetched rows and never inspects a database, so nothing in this
package calls it; a data-access collaborator calls
provider_column_availability() and resolve_provider_email_column() once per
engine and passes the results to capability_input_from_provider() and
rank_providers(email_column=...).

Called by: data-access callers building CapabilityMatchInput or picking the
           email column
Depends on: sqlalchemy (Inspector), schemas/capability.py
"""

from __future__ import annotations

from typing import Iterable
from weakref import WeakKeyDictionary

from loguru import logger
from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError

from .schemas.capability import ProviderColumnAvailability
from .services.eligibility_service import resolve_email_column

PROVIDERS_TABLE = "providers"

_column_cache: WeakKeyDictionary[Engine, dict[str, frozenset[str]]] = WeakKeyDictionary()
_warned: set[str] = set()


def clear_schema_cache() -> None:
    _column_cache.clear()
    _warned.clear()


def get_table_columns(engine: Engine, table: str) -> frozenset[str]:
    """Column names for `table`, empty when the table is missing or unreadable."""
    tables = _column_cache.get(engine)
    if tables is not None and table in tables:
        return tables[table]

    try:
        columns = frozenset(c["name"] for c in inspect(engine).get_columns(table))
    except NoSuchTableError:
        columns = frozenset()
    except SQLAlchemyError as exc:
        logger.warning(f"Schema inspection failed for {table}: {exc}")
        return frozenset()

    _column_cache.setdefault(engine, {})[table] = columns
    return columns


def has_columns(engine: Engine, table: str, columns: Iterable[str]) -> bool:
    wanted = list(columns)
    existing = get_table_columns(engine, table)
    missing = [c for c in wanted if c not in existing]
    if missing:
        warn_key = f"{table}:{','.join(sorted(missing))}"
        if warn_key not in _warned:
            _warned.add(warn_key)
            logger.warning(f"Schema contract: {table} missing columns {missing}")
        return False
    return True


def resolve_provider_email_column(engine: Engine) -> str | None:
    """First of primary_email / email / contact_email present on providers."""
    return resolve_email_column(get_table_columns(engine, PROVIDERS_TABLE))


def provider_column_availability(engine: Engine) -> ProviderColumnAvailability:
    existing = get_table_columns(engine, PROVIDERS_TABLE)
    return ProviderColumnAvailability(
        processes="processes" in existing,
        materials="materials" in existing,
        country="country" in existing,
        states="states" in existing,
        contacted_at="contacted_at" in existing,
    )
