"""
schemas/eligibility.py — Criteria, provider rows, and ranking results

Business Rules:
- Every criteria field is optional; None means "does not constrain"
- Criteria are immutable once built
- Match scores are only comparable within a single ranking call

Called by: services/criteria_service.py, services/eligibility_service.py,
           routers/matching.py
Depends on: pydantic
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProviderEmailColumn = Literal["primary_email", "email", "contact_email"]

# Priority order when more than one contact column exists
PROVIDER_EMAIL_COLUMNS: tuple[str, ...] = ("primary_email", "email", "contact_email")


class EligibilityReason(str, Enum):
    PROCESS_MATCH = "process_match"
    GEO_MATCH = "geo_match"
    KNOWN_CONTACT = "known_contact"
    VERIFIED_ACTIVE = "verified_active"


class EligibilityInputs(BaseModel):
    """Raw request attributes, as typed by the customer."""
    process: str | None = None
    quantity: str | int | float | None = None
    ship_to: str | None = None
    shipping_postal_code: str | None = None


class EligibilityCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    process: str | None = None
    ship_to_state: str | None = None
    ship_to_country: str | None = None
    quantity: int | None = None

    @property
    def has_signals(self) -> bool:
        """True when process or geography can filter providers."""
        return bool(self.process or self.ship_to_state or self.ship_to_country)


class ProviderRecord(BaseModel):
    """A provider row as supplied by the data-access layer."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    processes: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    country: str | None = None
    states: list[str] = Field(default_factory=list)
    is_active: bool = False
    verification_status: str = "unverified"
    primary_email: str | None = None
    email: str | None = None
    contact_email: str | None = None
    contacted_at: datetime | str | None = None
    dispatch_mode: str | None = None
    quoting_mode: str | None = None
    rfq_url: str | None = None
    website: str | None = None

    @field_validator("processes", "materials", "states", mode="before")
    @classmethod
    def clean_list(cls, v):
        # Un-backfilled rows carry NULL lists or NULL entries
        if v is None:
            return []
        if isinstance(v, list):
            return [s for s in v if isinstance(s, str)]
        return v

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v):
        return "" if v is None else v

    @field_validator("is_active", mode="before")
    @classmethod
    def clean_is_active(cls, v):
        return False if v is None else v

    @field_validator("verification_status", mode="before")
    @classmethod
    def clean_verification_status(cls, v):
        return "unverified" if v is None else v


class ProviderEligibilityMatch(BaseModel):
    provider_id: str
    reasons: list[EligibilityReason] = Field(default_factory=list)
    eligible: bool
    score: int


class EligibleProvidersResult(BaseModel):
    criteria: EligibilityCriteria
    ranked_providers: list[ProviderEligibilityMatch] = Field(default_factory=list)
    ranked_provider_ids: list[str] = Field(default_factory=list)
    eligible_provider_ids: list[str] = Field(default_factory=list)


class RankProvidersRequest(BaseModel):
    criteria: EligibilityCriteria = Field(default_factory=EligibilityCriteria)
    providers: list[ProviderRecord] = Field(default_factory=list)
    email_column: ProviderEmailColumn | None = None
    weights: dict[EligibilityReason, int] | None = None
