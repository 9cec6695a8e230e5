"""Eligibility ranker — which providers can quote a request, and in what order.

Reason weights (defaults from settings, overridable per call):
  process_match   4 — request process fuzzy-matches a provider process
  geo_match       3 — ship-to country or state is covered
  known_contact   2 — we have an email on file or have contacted them before
  verified_active 1 — active and verified

Eligibility only looks at process/geo. When the criteria carry neither,
every provider is eligible (nothing to filter on). Contact and verification
only move providers up the ranking.

Sort: eligible first → score desc → name → id. Fully deterministic; input
order never matters.
"""

from typing import Iterable

from ..config import get_settings
from ..schemas.eligibility import (
    PROVIDER_EMAIL_COLUMNS,
    EligibilityCriteria,
    EligibilityReason,
    EligibleProvidersResult,
    ProviderEligibilityMatch,
    ProviderRecord,
)
from ..utils.normalization import (
    normalize_country,
    normalize_processes,
    normalize_states,
    normalize_string,
)
from .criteria_service import normalize_criteria


def default_reason_weights() -> dict[EligibilityReason, int]:
    s = get_settings()
    return {
        EligibilityReason.PROCESS_MATCH: s.weight_process_match,
        EligibilityReason.GEO_MATCH: s.weight_geo_match,
        EligibilityReason.KNOWN_CONTACT: s.weight_known_contact,
        EligibilityReason.VERIFIED_ACTIVE: s.weight_verified_active,
    }


def resolve_email_column(available_columns: Iterable[str]) -> str | None:
    """First provider email column that exists in this deployment."""
    columns = set(available_columns)
    for column in PROVIDER_EMAIL_COLUMNS:
        if column in columns:
            return column
    return None


def has_matching_process(process: str, provider_processes: Iterable[str]) -> bool:
    """Loose match: equal, or either label contains the other ("cnc" ~ "cnc machining").

    No minimum token length is enforced, so very short labels can over-match.
    """
    if not process:
        return False
    for candidate in provider_processes:
        if not candidate:
            continue
        if candidate == process or process in candidate or candidate in process:
            return True
    return False


def _has_known_contact(provider: ProviderRecord, email_column: str | None) -> bool:
    contacted_at = provider.contacted_at
    if isinstance(contacted_at, str):
        if contacted_at.strip():
            return True
    elif contacted_at is not None:
        return True
    if not email_column:
        return False
    return bool(normalize_string(getattr(provider, email_column, None)))


def _is_verified_active(provider: ProviderRecord) -> bool:
    return bool(provider.is_active) and normalize_string(provider.verification_status).lower() == "verified"


def _sort_key(entry: tuple[ProviderEligibilityMatch, str]):
    match, name = entry
    # casefold first for a locale-like order, raw name keeps it total
    return (not match.eligible, -match.score, name.casefold(), name, match.provider_id)


def rank_providers(
    criteria: EligibilityCriteria,
    providers: list[ProviderRecord],
    email_column: str | None = None,
    weights: dict[EligibilityReason, int] | None = None,
) -> EligibleProvidersResult:
    """Score, filter and rank providers for one request."""
    w = {**default_reason_weights(), **(weights or {})}
    normalized = normalize_criteria(criteria)
    has_signals = normalized.has_signals

    ranked: list[tuple[ProviderEligibilityMatch, str]] = []
    for provider in providers:
        provider_processes = normalize_processes(provider.processes)
        provider_country = normalize_country(provider.country)
        provider_states = set(normalize_states(provider.states))

        process_match = bool(normalized.process) and has_matching_process(
            normalized.process, provider_processes
        )
        geo_match = bool(
            normalized.ship_to_country
            and provider_country
            and normalized.ship_to_country == provider_country
        ) or bool(normalized.ship_to_state and normalized.ship_to_state in provider_states)

        reasons = []
        if process_match:
            reasons.append(EligibilityReason.PROCESS_MATCH)
        if geo_match:
            reasons.append(EligibilityReason.GEO_MATCH)
        if _has_known_contact(provider, email_column):
            reasons.append(EligibilityReason.KNOWN_CONTACT)
        if _is_verified_active(provider):
            reasons.append(EligibilityReason.VERIFIED_ACTIVE)

        eligible = (process_match or geo_match) if has_signals else True
        match = ProviderEligibilityMatch(
            provider_id=provider.id,
            reasons=reasons,
            eligible=eligible,
            score=sum(w.get(r, 0) for r in reasons),
        )
        ranked.append((match, provider.name or ""))

    ranked.sort(key=_sort_key)
    ranked_providers = [match for match, _ in ranked]

    return EligibleProvidersResult(
        criteria=normalized,
        ranked_providers=ranked_providers,
        ranked_provider_ids=[m.provider_id for m in ranked_providers],
        eligible_provider_ids=[m.provider_id for m in ranked_providers if m.eligible],
    )
