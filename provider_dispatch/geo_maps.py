"""
geo_maps.py — US state and country alias lookup tables loader.

Loads state-name→code and country-alias→code mappings from a JSON config
file. Tables are cached in memory at import and can be reloaded via
load_geo_maps().

Business Rules:
- All keys and values are stored upper-case
- State codes are the set of values of the state-name table
- Missing or invalid config file logs and keeps the previously loaded tables

Called by: utils/normalization.py
Depends on: provider_dispatch/config/geo_maps.json
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from .config import get_settings

_CONFIG_PATH = Path(__file__).parent / "config" / "geo_maps.json"

_state_name_map: dict[str, str] = {}
_state_codes: frozenset[str] = frozenset()
_country_alias_map: dict[str, str] = {}


def _load_from_file(path: Path) -> tuple[dict[str, str], dict[str, str]] | None:
    """Read and parse the geo maps JSON file. None when unreadable."""
    if not path.exists():
        logger.warning(f"Geo maps config not found at {path}")
        return None

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        logger.error(f"Failed to parse geo maps config: {exc}")
        return None
    if not isinstance(raw, dict):
        logger.error(f"Geo maps config at {path} is not a JSON object")
        return None

    states = {
        str(k).strip().upper(): str(v).strip().upper()
        for k, v in (raw.get("us_states") or {}).items()
    }
    countries = {
        str(k).strip().upper(): str(v).strip().upper()
        for k, v in (raw.get("country_aliases") or {}).items()
    }
    return states, countries


def load_geo_maps(path: Path | None = None) -> bool:
    """Load (or reload) the lookup tables. Returns False if the file was unusable."""
    global _state_name_map, _state_codes, _country_alias_map
    override = get_settings().geo_maps_path
    target = path or (Path(override) if override else _CONFIG_PATH)
    loaded = _load_from_file(target)
    if loaded is None:
        return False
    states, countries = loaded
    _state_name_map = states
    _state_codes = frozenset(states.values())
    _country_alias_map = countries
    logger.info(
        f"Geo maps loaded: {len(_state_name_map)} states, "
        f"{len(_country_alias_map)} country aliases"
    )
    return True


def get_state_name_map() -> dict[str, str]:
    return _state_name_map


def get_state_codes() -> frozenset[str]:
    return _state_codes


def get_country_alias_map() -> dict[str, str]:
    return _country_alias_map


# Auto-load on import
load_geo_maps()
