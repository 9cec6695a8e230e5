"""Dispatch mode resolver.

Providers carry the same concept under two column names: `dispatch_mode`
(current) and `quoting_mode` (legacy). This is the one place that knows
about both; everything else asks for the resolved mode.
"""

from typing import Any

from ..schemas.dispatch import DispatchMode
from ..schemas.eligibility import ProviderRecord
from ..utils.normalization import normalize_string

# Checked in this order; the first recognized value wins
_MODE_FIELDS = ("dispatch_mode", "quoting_mode")
_KNOWN_MODES = {m.value: m for m in DispatchMode}


def normalize_mode_value(value: Any) -> str:
    return normalize_string(value).lower()


def resolve_dispatch_mode_value(
    dispatch_mode: Any, quoting_mode: Any = None
) -> DispatchMode | None:
    for raw in (dispatch_mode, quoting_mode):
        mode = _KNOWN_MODES.get(normalize_mode_value(raw))
        if mode:
            return mode
    return None


def resolve_provider_dispatch_mode(provider: ProviderRecord) -> DispatchMode | None:
    values = [getattr(provider, field, None) for field in _MODE_FIELDS]
    return resolve_dispatch_mode_value(*values)
