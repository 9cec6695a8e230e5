"""
sla.py — Outreach SLA Router

Needs-action checks for one destination or a whole request.

Business Rules:
- `now` defaults to the server clock (UTC) when omitted
- Config omitted → settings defaults

Called by: main.py (router mount), ops dashboards
Depends on: services/sla_service
"""

from fastapi import APIRouter

from ..schemas.sla import (
    DestinationNeedsActionResult,
    DestinationSlaRequest,
    QuoteNeedsActionResult,
    QuoteSlaRequest,
)
from ..services.sla_service import compute_destination_needs_action, compute_quote_needs_action

router = APIRouter(tags=["sla"])


@router.post("/api/sla/destination", response_model=DestinationNeedsActionResult)
async def sla_destination(payload: DestinationSlaRequest):
    return compute_destination_needs_action(payload.destination, payload.now, payload.config)


@router.post("/api/sla/quote", response_model=QuoteNeedsActionResult)
async def sla_quote(payload: QuoteSlaRequest):
    return compute_quote_needs_action(
        payload.destinations, payload.offers, payload.now, payload.config
    )
