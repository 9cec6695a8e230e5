"""Deterministic normalization — pure Python, no lookups against the record store.

Normalizes free-text request and provider attributes:
  - Processes: "  CNC Machining " → "cnc machining"
  - Quantities: "1,500 pcs" → 1500
  - States: "California" → "CA", "ca" → "CA"
  - Countries: "U.S.A." → "US", "Germany" → "GERMANY"
  - Timestamps: ISO strings / epoch millis / datetimes → aware datetime

Design: never raise on bad input. Return None and let callers treat it as
"unconstrained".
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Iterable

from ..geo_maps import get_country_alias_map, get_state_codes, get_state_name_map

_QTY_RE = re.compile(r"[\d,.]+")
_NON_ALPHA_RE = re.compile(r"[^A-Z]")
_COUNTRY_PUNCT_RE = re.compile(r"[.\s]+")


# ── Text ──────────────────────────────────────────────────────────────


def normalize_optional_text(value: Any) -> str | None:
    """Trimmed string, or None for non-strings and blanks."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def normalize_string(value: Any) -> str:
    """Trimmed string, "" for non-strings."""
    if not isinstance(value, str):
        return ""
    return value.strip()


def normalize_list(values: Any) -> list[str]:
    """Trimmed, non-empty strings from a list. Anything else → []."""
    if not isinstance(values, (list, tuple)):
        return []
    out = []
    for value in values:
        if isinstance(value, str) and value.strip():
            out.append(value.strip())
    return out


def dedupe(values: Iterable[str]) -> list[str]:
    """Drop duplicates, keep first-seen order."""
    return list(dict.fromkeys(values))


def title_case(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        return trimmed
    return " ".join(part[:1].upper() + part[1:] for part in trimmed.split())


def format_short_list(values: list[str], max_items: int = 3) -> str:
    """["a", "b", "c", "d"] → "a, b, c (+1)" """
    unique = dedupe(v for v in values if v)
    limited = unique[: max(1, max_items)]
    if len(unique) <= len(limited):
        return ", ".join(limited)
    return f"{', '.join(limited)} (+{len(unique) - len(limited)})"


# ── Process / material ────────────────────────────────────────────────


def normalize_process(value: Any) -> str | None:
    """Lower-cased, trimmed process label. Empty → None."""
    text = normalize_optional_text(value)
    return text.lower() if text else None


def normalize_processes(values: Any) -> list[str]:
    return dedupe(p for p in (normalize_process(v) for v in normalize_list(values)) if p)


# ── Quantity ──────────────────────────────────────────────────────────


def normalize_quantity(raw: Any) -> int | None:
    """Parse a requested quantity. Handles: 550, 550.9, "1,500", "550 units".

    The first numeric run wins; result is floored and clamped at 0.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        return max(0, math.floor(raw))
    if not isinstance(raw, str):
        return None

    match = _QTY_RE.search(raw.strip())
    if not match:
        return None
    try:
        value = float(match.group(0).replace(",", ""))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return max(0, math.floor(value))


# ── Geography ─────────────────────────────────────────────────────────


def normalize_state(value: Any) -> str | None:
    """Two-letter US state code from a code or full name. Unknown → None."""
    raw = normalize_string(value).upper()
    if not raw:
        return None
    if raw in get_state_codes():
        return raw
    cleaned = " ".join(_NON_ALPHA_RE.sub(" ", raw).split())
    if not cleaned:
        return None
    return get_state_name_map().get(cleaned)


def normalize_states(values: Any) -> list[str]:
    return dedupe(s for s in (normalize_state(v) for v in normalize_list(values)) if s)


def _country_forms(value: Any) -> tuple[str, str] | None:
    upper = normalize_string(value).upper()
    cleaned = _COUNTRY_PUNCT_RE.sub(" ", upper).strip()
    if not cleaned:
        return None
    return cleaned, upper


def lookup_country_alias(value: Any) -> str | None:
    """Country code only when `value` is a known alias ("u.s.a." → "US")."""
    forms = _country_forms(value)
    if forms is None:
        return None
    aliases = get_country_alias_map()
    cleaned, upper = forms
    return aliases.get(cleaned) or aliases.get(upper)


def normalize_country(value: Any) -> str | None:
    """Alias-mapped country code; unknown values pass through upper-cased."""
    forms = _country_forms(value)
    if forms is None:
        return None
    return lookup_country_alias(value) or forms[0]


# ── Timestamps ────────────────────────────────────────────────────────


def coerce_datetime(value: Any) -> datetime | None:
    """Best-effort timestamp parse. Naive datetimes are assumed UTC.

    Accepts datetime, ISO-8601 strings (including a trailing "Z") and
    epoch milliseconds. Anything unparseable → None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
