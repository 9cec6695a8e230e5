"""
schemas/sla.py — Outreach destination rows and SLA results

Business Rules:
- Unrecognized statuses are treated as "draft"
- quoted / declined are terminal for SLA purposes
- Thresholds are hours and must not be negative

Called by: services/sla_service.py, routers/sla.py
Depends on: pydantic
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class DestinationStatus(str, Enum):
    DRAFT = "draft"
    QUEUED = "queued"
    SENT = "sent"
    SUBMITTED = "submitted"
    VIEWED = "viewed"
    QUOTED = "quoted"
    DECLINED = "declined"
    ERROR = "error"


class SlaReason(str, Enum):
    QUEUED_TOO_LONG = "queued_too_long"
    SENT_NO_REPLY = "sent_no_reply"
    ERROR = "error"


class SlaConfig(BaseModel):
    queued_max_hours: float = 4
    sent_no_reply_max_hours: float = 48
    error_always_needs_action: bool = True

    @field_validator("queued_max_hours", "sent_no_reply_max_hours")
    @classmethod
    def non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("SLA thresholds must be zero or more hours")
        return v


class DestinationRecord(BaseModel):
    id: str | None = None
    status: str | None = None
    created_at: datetime | str | None = None
    sent_at: datetime | str | None = None
    last_status_at: datetime | str | None = None
    provider_id: str | None = None
    has_offer: bool = False


class OfferRef(BaseModel):
    provider_id: str | None = None


class DestinationNeedsActionResult(BaseModel):
    needs_action: bool
    reason: SlaReason | None = None
    age_hours: float = 0


class QuoteNeedsActionResult(BaseModel):
    needs_action_count: int = 0
    needs_reply_count: int = 0
    errors_count: int = 0
    queued_stale_count: int = 0


class QuoteOutreach(BaseModel):
    """All destinations and received offers for one request."""
    quote_id: str | None = None
    destinations: list[DestinationRecord] = Field(default_factory=list)
    offers: list[OfferRef] = Field(default_factory=list)


class DestinationSlaRequest(BaseModel):
    destination: DestinationRecord
    now: datetime | None = None
    config: SlaConfig | None = None


class QuoteSlaRequest(QuoteOutreach):
    now: datetime | None = None
    config: SlaConfig | None = None
