"""Outreach SLA — which destinations need a human to step in.

Pure functions of (destination, now, config). Safe to re-run at any time:
results are recomputed from timestamps, never accumulated.

Decision table:
  error                   → needs action when error_always_needs_action
  queued                  → age > queued_max_hours            (queued_too_long)
  sent/submitted/viewed   → no offer and age > sent_no_reply  (sent_no_reply)
  quoted/declined/draft   → never

Reference timestamp (first non-null wins):
  queued                  created_at, last_status_at
  sent/submitted/viewed   sent_at, last_status_at, created_at
  error                   last_status_at, created_at
  everything else         last_status_at, created_at, sent_at
"""

import math
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from ..config import get_settings
from ..schemas.sla import (
    DestinationNeedsActionResult,
    DestinationRecord,
    DestinationStatus,
    OfferRef,
    QuoteNeedsActionResult,
    QuoteOutreach,
    SlaConfig,
    SlaReason,
)
from ..utils.normalization import coerce_datetime, normalize_string

SECONDS_PER_HOUR = 3600

_AWAITING_REPLY = {
    DestinationStatus.SENT,
    DestinationStatus.SUBMITTED,
    DestinationStatus.VIEWED,
}
_KNOWN_STATUSES = {s.value: s for s in DestinationStatus}


def default_sla_config() -> SlaConfig:
    s = get_settings()
    return SlaConfig(
        queued_max_hours=s.sla_queued_max_hours,
        sent_no_reply_max_hours=s.sla_sent_no_reply_max_hours,
        error_always_needs_action=s.sla_error_always_needs_action,
    )


def resolve_sla_config(config: SlaConfig | Mapping[str, Any] | None = None) -> SlaConfig:
    """Full config from a SlaConfig, a partial mapping of overrides, or None."""
    if isinstance(config, SlaConfig):
        return config
    base = default_sla_config()
    if not config:
        return base
    overrides = {k: v for k, v in config.items() if v is not None and k in SlaConfig.model_fields}
    return SlaConfig(**{**base.model_dump(), **overrides})


def normalize_status(value: Any) -> DestinationStatus:
    return _KNOWN_STATUSES.get(normalize_string(value).lower(), DestinationStatus.DRAFT)


def _first_timestamp(*values: Any) -> datetime | None:
    for value in values:
        dt = coerce_datetime(value)
        if dt:
            return dt
    return None


def resolve_reference_time(status: DestinationStatus, destination: DestinationRecord) -> datetime | None:
    d = destination
    if status == DestinationStatus.QUEUED:
        return _first_timestamp(d.created_at, d.last_status_at)
    if status in _AWAITING_REPLY:
        return _first_timestamp(d.sent_at, d.last_status_at, d.created_at)
    if status == DestinationStatus.ERROR:
        return _first_timestamp(d.last_status_at, d.created_at)
    return _first_timestamp(d.last_status_at, d.created_at, d.sent_at)


def compute_age_hours(now: datetime, since: datetime | None) -> float:
    """Hours elapsed, floored at 0 (future timestamps / clock skew → 0)."""
    if since is None:
        return 0.0
    seconds = (now - since).total_seconds()
    if seconds <= 0:
        return 0.0
    return seconds / SECONDS_PER_HOUR


def _resolve_now(now: Any) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    # An unusable "now" falls back to the epoch, which makes every age 0
    return coerce_datetime(now) or datetime.fromtimestamp(0, tz=timezone.utc)


def compute_destination_needs_action(
    destination: DestinationRecord,
    now: datetime | str | int | float | None = None,
    config: SlaConfig | Mapping[str, Any] | None = None,
) -> DestinationNeedsActionResult:
    cfg = resolve_sla_config(config)
    status = normalize_status(destination.status)
    age_hours = compute_age_hours(_resolve_now(now), resolve_reference_time(status, destination))

    reason = None
    if status == DestinationStatus.ERROR:
        if cfg.error_always_needs_action:
            reason = SlaReason.ERROR
    elif status == DestinationStatus.QUEUED:
        if age_hours > cfg.queued_max_hours:
            reason = SlaReason.QUEUED_TOO_LONG
    elif status in _AWAITING_REPLY:
        if not destination.has_offer and age_hours > cfg.sent_no_reply_max_hours:
            reason = SlaReason.SENT_NO_REPLY

    return DestinationNeedsActionResult(
        needs_action=reason is not None,
        reason=reason,
        age_hours=age_hours,
    )


def compute_quote_needs_action(
    destinations: Iterable[DestinationRecord],
    offers: Iterable[OfferRef],
    now: datetime | str | int | float | None = None,
    config: SlaConfig | Mapping[str, Any] | None = None,
) -> QuoteNeedsActionResult:
    """Tally needs-action counts for one request.

    has_offer comes from the offers actually received (matched on
    provider_id), not from the destination's own status or flag.
    """
    cfg = resolve_sla_config(config)
    now_dt = _resolve_now(now)
    offer_provider_ids = {
        pid for pid in (normalize_string(o.provider_id) for o in offers or []) if pid
    }

    counts = QuoteNeedsActionResult()
    for destination in destinations or []:
        provider_id = normalize_string(destination.provider_id)
        has_offer = bool(provider_id) and provider_id in offer_provider_ids
        result = compute_destination_needs_action(
            destination.model_copy(update={"has_offer": has_offer}), now_dt, cfg
        )
        if result.needs_action:
            counts.needs_action_count += 1
        if result.reason == SlaReason.SENT_NO_REPLY:
            counts.needs_reply_count += 1
        elif result.reason == SlaReason.ERROR:
            counts.errors_count += 1
        elif result.reason == SlaReason.QUEUED_TOO_LONG:
            counts.queued_stale_count += 1
    return counts


def sweep_needs_action(
    quotes: Iterable[QuoteOutreach],
    now: datetime | str | int | float | None = None,
    config: SlaConfig | Mapping[str, Any] | None = None,
) -> dict[str, QuoteNeedsActionResult]:
    """Periodic batch sweep over open requests, keyed by quote id.

    Every request shares one `now` so a sweep is a consistent snapshot.
    Requests without an id are keyed by their position.
    """
    cfg = resolve_sla_config(config)
    now_dt = _resolve_now(now)
    results = {}
    for index, quote in enumerate(quotes):
        key = normalize_string(quote.quote_id) or str(index)
        results[key] = compute_quote_needs_action(quote.destinations, quote.offers, now_dt, cfg)
    return results


def format_sla_response_time(hours: float | None) -> str | None:
    """48 → "within 2 days", 5 → "within 5 hours", ≤0 → None."""
    if hours is None or not math.isfinite(hours) or hours <= 0:
        return None
    rounded = max(1, math.floor(hours + 0.5))
    if rounded < 24:
        return f"within {rounded} hour{'' if rounded == 1 else 's'}"
    days = max(1, math.ceil(rounded / 24))
    return f"within {days} day{'' if days == 1 else 's'}"
