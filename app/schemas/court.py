"""
app/schemas/court.py

Response schemas for the regional labor court table.
"""

from __future__ import annotations

from pydantic import ConfigDict

from app.schemas.liability import CamelModel


class CourtResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    name: str
    state: str
    state_abbrev: str
    region: str


class RegionCourtsResponse(CamelModel):
    region: str
    courts: list[CourtResponse]


class ParsedCaseNumberResponse(CamelModel):
    """
    Court fields derived from a case number; all null when unresolved.
    """

    model_config = ConfigDict(from_attributes=True)

    case_number: str
    court_code: str | None = None
    court_name: str | None = None
    state: str | None = None
    state_abbrev: str | None = None
    region: str | None = None
