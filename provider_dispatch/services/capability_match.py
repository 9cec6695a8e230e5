"""Capability match — scores a provider's advertised capabilities.

Three independent signals, each weighted (defaults from settings):
  1. Processes (60) — routing-critical; empty list is a hard mismatch
  2. Materials (20) — useful, never blocking
  3. Geo (20)       — country or ≥1 state; many providers ship broadly

Signals whose column is unavailable in this deployment are left out of the
denominator entirely. Score = round(100 × earned / available), None when
nothing is evaluable.

Health order: unknown (no score) → mismatch → partial → match.
"""

from ..config import get_settings
from ..schemas.capability import (
    CapabilityBreakdownItem,
    CapabilityHealth,
    CapabilityMatchAssessment,
    CapabilityMatchInput,
    CapabilitySignal,
    ProviderColumnAvailability,
)
from ..schemas.eligibility import ProviderRecord
from ..utils.normalization import (
    format_short_list,
    normalize_country,
    normalize_list,
    normalize_processes,
    normalize_string,
    title_case,
)


def default_capability_weights() -> dict[str, int]:
    s = get_settings()
    return {
        "processes": s.weight_capability_processes,
        "materials": s.weight_capability_materials,
        "geo": s.weight_capability_geo,
    }


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def _normalize_capability_state(value: str) -> str | None:
    # Stability only: any two-letter code is kept, full names are not mapped here
    raw = normalize_string(value).upper()
    if len(raw) == 2 and raw.isalpha() and raw.isascii():
        return raw
    return None


def _capability_country(signal: CapabilitySignal) -> str | None:
    for value in normalize_list(signal.values):
        country = normalize_country(value)
        if country:
            return country
    return None


def assess_provider_capability_match(
    data: CapabilityMatchInput,
    weights: dict[str, int] | None = None,
) -> CapabilityMatchAssessment:
    """Assess one provider's capability coverage. Never raises on empty data."""
    w = {**default_capability_weights(), **(weights or {})}

    processes_available = data.processes.available
    materials_available = data.materials.available
    geo_available = data.country.available or data.states.available

    processes = normalize_processes(data.processes.values)
    materials = normalize_processes(data.materials.values)
    country = _capability_country(data.country) if data.country.available else None
    states = []
    if data.states.available:
        for value in normalize_list(data.states.values):
            state = _normalize_capability_state(value)
            if state and state not in states:
                states.append(state)

    matches: list[str] = []
    partial_matches: list[str] = []
    mismatch_reasons: list[str] = []

    if processes_available:
        if processes:
            matches.append(f"Processes: {format_short_list([title_case(p) for p in processes])}")
        else:
            mismatch_reasons.append("No processes recorded.")

    if materials_available:
        if materials:
            matches.append(f"Materials: {format_short_list([title_case(m) for m in materials])}")
        else:
            partial_matches.append("Materials missing.")

    if geo_available:
        geo_bits = []
        if country:
            geo_bits.append(country)
        if states:
            geo_bits.append(_plural(len(states), "state", "states"))
        if geo_bits:
            matches.append(f"Geo: {' · '.join(geo_bits)}")
        else:
            partial_matches.append("Location coverage missing.")

    breakdown = [
        CapabilityBreakdownItem(
            key="processes",
            label="Processes",
            available=processes_available,
            present=processes_available and bool(processes),
            weight=w["processes"],
            notes=(
                [_plural(len(processes), "process", "processes")] if processes else ["Empty processes list"]
            ) if processes_available else ["Column unavailable"],
        ),
        CapabilityBreakdownItem(
            key="materials",
            label="Materials",
            available=materials_available,
            present=materials_available and bool(materials),
            weight=w["materials"],
            notes=(
                [_plural(len(materials), "material", "materials")] if materials else ["Empty materials list"]
            ) if materials_available else ["Column unavailable"],
        ),
        CapabilityBreakdownItem(
            key="geo",
            label="Geo coverage",
            available=geo_available,
            present=geo_available and bool(country or states),
            weight=w["geo"],
            notes=[
                f"Country: {country}" if country else "Country missing",
                f"States: {', '.join(states)}" if states else "States missing",
            ] if geo_available else ["Columns unavailable"],
        ),
    ]

    available_weight = 0
    earned_weight = 0
    for item in breakdown:
        if not item.available:
            continue
        available_weight += item.weight
        if item.present:
            item.earned = item.weight
            earned_weight += item.weight

    score = round(earned_weight / available_weight * 100) if available_weight > 0 else None

    if score is None:
        health = CapabilityHealth.UNKNOWN
    elif mismatch_reasons:
        health = CapabilityHealth.MISMATCH
    elif partial_matches:
        health = CapabilityHealth.PARTIAL
    else:
        health = CapabilityHealth.MATCH

    return CapabilityMatchAssessment(
        health=health,
        matches=matches,
        partial_matches=partial_matches,
        mismatch_reasons=mismatch_reasons,
        score=score,
        breakdown=breakdown,
    )


def capability_input_from_provider(
    provider: ProviderRecord,
    availability: ProviderColumnAvailability,
) -> CapabilityMatchInput:
    """Pair a provider row with this deployment's column availability."""
    def signal(available: bool, values) -> CapabilitySignal:
        return CapabilitySignal.of(values) if available else CapabilitySignal.unavailable()

    return CapabilityMatchInput(
        processes=signal(availability.processes, provider.processes),
        materials=signal(availability.materials, provider.materials),
        country=signal(availability.country, provider.country),
        states=signal(availability.states, provider.states),
    )
