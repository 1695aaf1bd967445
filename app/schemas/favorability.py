"""
app/schemas/favorability.py

Request and response schemas for judges, judgments and favorability reports.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from app.schemas.liability import CamelModel
from litigation.favorability import Outcome


class FavorabilityStatsResponse(CamelModel):
    total: int = Field(..., ge=0)
    favorable: int = Field(..., ge=0)
    unfavorable: int = Field(..., ge=0)
    partial: int = Field(..., ge=0)
    percent_favorable: int = Field(..., ge=0, le=100)
    percent_unfavorable: int = Field(..., ge=0, le=100)


class JudgeCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    court_code: str = Field(..., min_length=1, max_length=2)
    kind: Literal["first_instance", "appellate"] = "first_instance"
    chamber: str | None = Field(default=None, max_length=255)

    @field_validator("court_code")
    @classmethod
    def _digits_only(cls, value: str) -> str:
        value = value.strip()
        if not value.isdigit():
            raise ValueError("court_code must be numeric.")
        return value.zfill(2)


class JudgeResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    court_code: str
    chamber: str | None
    kind: str
    created_at: datetime


class JudgeFavorabilityResponse(CamelModel):
    judge: JudgeResponse
    stats: FavorabilityStatsResponse


class JudgmentCreate(CamelModel):
    judge_id: uuid.UUID
    case_number: str = Field(..., min_length=1, max_length=64)
    outcome: Outcome
    judged_on: date | None = None
    party: str | None = Field(default=None, max_length=255)


class JudgmentUpdate(CamelModel):
    outcome: Outcome | None = None
    judged_on: date | None = None
    party: str | None = Field(default=None, max_length=255)


class JudgmentResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    judge_id: uuid.UUID
    case_number: str
    outcome: str
    judged_on: date | None
    party: str | None
    created_at: datetime


class CourtFavorabilityResponse(CamelModel):
    court_code: str
    court_name: str
    state_abbrev: str
    region: str
    stats: FavorabilityStatsResponse


class CourtFavorabilityReportResponse(CamelModel):
    courts: list[CourtFavorabilityResponse] = Field(default_factory=list)
    unresolved: int = Field(..., ge=0)


class ChamberFavorabilityResponse(CamelModel):
    court_code: str
    court_name: str
    state_abbrev: str
    chamber: str
    judge_count: int = Field(..., ge=1)
    stats: FavorabilityStatsResponse


class StateFavorabilityResponse(CamelModel):
    state_abbrev: str
    court_codes: list[str]
    stats: FavorabilityStatsResponse
