"""
matching.py — Eligibility & Capability Router

Builds criteria from raw request attributes, ranks providers, and scores
a single provider's capability coverage.

Business Rules:
- Ranking input order never affects output order
- No persistence; providers arrive fully loaded in the request body

Called by: main.py (router mount)
Depends on: services/criteria_service, services/eligibility_service,
            services/capability_match
"""

from fastapi import APIRouter

from ..schemas.capability import CapabilityAssessRequest, CapabilityMatchAssessment
from ..schemas.eligibility import (
    EligibilityCriteria,
    EligibilityInputs,
    EligibleProvidersResult,
    RankProvidersRequest,
)
from ..services.capability_match import assess_provider_capability_match
from ..services.criteria_service import build_eligibility_criteria
from ..services.eligibility_service import rank_providers

router = APIRouter(tags=["matching"])


@router.post("/api/eligibility/criteria", response_model=EligibilityCriteria)
async def eligibility_criteria(payload: EligibilityInputs):
    return build_eligibility_criteria(payload)


@router.post("/api/eligibility/rank", response_model=EligibleProvidersResult)
async def eligibility_rank(payload: RankProvidersRequest):
    return rank_providers(
        payload.criteria,
        payload.providers,
        email_column=payload.email_column,
        weights=payload.weights,
    )


@router.post("/api/capability/assess", response_model=CapabilityMatchAssessment)
async def capability_assess(payload: CapabilityAssessRequest):
    return assess_provider_capability_match(payload.input, weights=payload.weights)
