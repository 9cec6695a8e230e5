"""
dispatch.py — Outbound Dispatch & Readiness Router

Builds the channel-specific outbound payload for a provider and checks
whether a destination has what its channel needs.

Business Rules:
- Unsupported provider mode → 422, nothing built
- Readiness is advisory; the caller decides whether to block the send
- Not-ready diagnostics are logged once per key for the app's lifetime

Called by: main.py (router mount)
Depends on: adapters, services/dispatch_readiness
"""

from fastapi import APIRouter, HTTPException, Request

from ..adapters import UnsupportedDispatchModeError, build_outbound
from ..schemas.dispatch import (
    BuildOutboundArgs,
    DispatchReadinessResult,
    OutboundDispatch,
    ReadinessDestination,
)
from ..services.dispatch_readiness import NotReadyLogSink, get_destination_dispatch_readiness

router = APIRouter(tags=["dispatch"])


def _readiness_sink(request: Request) -> NotReadyLogSink:
    sink = getattr(request.app.state, "readiness_log_sink", None)
    if sink is None:
        sink = NotReadyLogSink()
        request.app.state.readiness_log_sink = sink
    return sink


@router.post("/api/dispatch/outbound", response_model=OutboundDispatch)
async def dispatch_outbound(payload: BuildOutboundArgs):
    try:
        return build_outbound(payload)
    except UnsupportedDispatchModeError as exc:
        raise HTTPException(422, str(exc))


@router.post("/api/dispatch/readiness", response_model=DispatchReadinessResult)
async def dispatch_readiness(payload: ReadinessDestination, request: Request):
    return get_destination_dispatch_readiness(payload, log_sink=_readiness_sink(request))
