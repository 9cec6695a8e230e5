"""
schemas/dispatch.py — Outbound dispatch payloads and readiness results

OutboundDispatch is a tagged union on `mode`. It is built fresh for every
send attempt and handed to an external transport; it is never stored.

Called by: adapters/*, services/dispatch_readiness.py, routers/dispatch.py
Depends on: pydantic, schemas/eligibility.py (ProviderRecord)
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .eligibility import ProviderRecord


class DispatchMode(str, Enum):
    EMAIL = "email"
    WEB_FORM = "web_form"
    API = "api"


# ── Adapter inputs ──────────────────────────────────────────────────────


class QuoteSummary(BaseModel):
    """The request fields an outbound message draws on."""
    id: str
    title: str | None = None
    process: str | None = None
    material: str | None = None
    quantity: int | float | str | None = None
    tolerances: str | None = None
    finish: str | None = None
    desired_lead_time: str | None = None
    target_date: date | datetime | str | None = None
    requester_name: str | None = None
    requester_company: str | None = None


class CustomerContact(BaseModel):
    name: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None


class FileLink(BaseModel):
    label: str | None = None
    url: str | None = None


class DestinationContext(BaseModel):
    id: str | None = None
    offer_link: str | None = None


class BuildOutboundArgs(BaseModel):
    quote: QuoteSummary
    provider: ProviderRecord
    destination: DestinationContext | None = None
    customer: CustomerContact | None = None
    files: list[FileLink] = Field(default_factory=list)


# ── Outbound payloads ───────────────────────────────────────────────────


class EmailDispatch(BaseModel):
    mode: Literal["email"] = "email"
    subject: str
    body: str


class WebFormDispatch(BaseModel):
    mode: Literal["web_form"] = "web_form"
    web_form_url: str | None = None
    web_form_instructions: str


class ApiDispatch(BaseModel):
    mode: Literal["api"] = "api"
    payload_json: str


OutboundDispatch = Annotated[
    Union[EmailDispatch, WebFormDispatch, ApiDispatch],
    Field(discriminator="mode"),
]


# ── Readiness ───────────────────────────────────────────────────────────


class ReadinessProviderContact(BaseModel):
    primary_email: str | None = None
    email: str | None = None
    contact_email: str | None = None
    rfq_url: str | None = None


class ReadinessDestination(BaseModel):
    """Destination row joined with the provider contact columns."""
    id: str | None = None
    dispatch_mode: str | None = None
    quoting_mode: str | None = None
    provider_email: str | None = None
    provider_rfq_url: str | None = None
    provider: ReadinessProviderContact | None = None


class DispatchReadinessFix(BaseModel):
    label: str
    href: str | None = None
    action: str | None = None


class DispatchReadinessResult(BaseModel):
    is_ready: bool
    blocking_reasons: list[str] = Field(default_factory=list)
    recommended_fix: DispatchReadinessFix | None = None
