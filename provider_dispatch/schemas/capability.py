"""
schemas/capability.py — Tri-state capability signals and match assessment

Each signal carries an explicit `available` flag (column exists in this
deployment) next to its values, so "not migrated yet" never looks like
"provider left it blank".

Called by: services/capability_match.py, routers/matching.py
Depends on: pydantic
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

CapabilityKey = Literal["processes", "materials", "geo"]


class CapabilityHealth(str, Enum):
    MATCH = "match"
    PARTIAL = "partial"
    MISMATCH = "mismatch"
    UNKNOWN = "unknown"


class CapabilitySignal(BaseModel):
    available: bool = False
    values: list[str] = Field(default_factory=list)

    @classmethod
    def unavailable(cls) -> "CapabilitySignal":
        return cls(available=False)

    @classmethod
    def of(cls, values: list[str] | str | None) -> "CapabilitySignal":
        if values is None:
            return cls(available=True)
        if isinstance(values, str):
            return cls(available=True, values=[values])
        return cls(available=True, values=list(values))


class CapabilityMatchInput(BaseModel):
    processes: CapabilitySignal = Field(default_factory=CapabilitySignal)
    materials: CapabilitySignal = Field(default_factory=CapabilitySignal)
    country: CapabilitySignal = Field(default_factory=CapabilitySignal)
    states: CapabilitySignal = Field(default_factory=CapabilitySignal)


class ProviderColumnAvailability(BaseModel):
    """Which provider capability/contact columns exist in this environment."""
    processes: bool = False
    materials: bool = False
    country: bool = False
    states: bool = False
    contacted_at: bool = False


class CapabilityBreakdownItem(BaseModel):
    key: CapabilityKey
    label: str
    available: bool
    present: bool
    weight: int
    earned: int = 0
    notes: list[str] = Field(default_factory=list)


class CapabilityMatchAssessment(BaseModel):
    health: CapabilityHealth
    matches: list[str] = Field(default_factory=list)
    partial_matches: list[str] = Field(default_factory=list)
    mismatch_reasons: list[str] = Field(default_factory=list)
    # Admin diagnostics only; None when nothing is evaluable
    score: int | None = None
    breakdown: list[CapabilityBreakdownItem] = Field(default_factory=list)


class CapabilityAssessRequest(BaseModel):
    input: CapabilityMatchInput = Field(default_factory=CapabilityMatchInput)
    weights: dict[CapabilityKey, int] | None = None
