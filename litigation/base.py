"""
litigation/base.py

Closed enumerations and the immutable normalized case record shared by the
normalizer, the ingestion pipeline and the aggregation engine.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


class Company(str, Enum):
    """Responsible company. Declaration order is the display order."""

    MAIN_TENANT = "MainTenant"
    PARTNER_A = "PartnerA"
    PARTNER_B = "PartnerB"
    PARTNER_C = "PartnerC"
    OTHER = "Other"


class Phase(str, Enum):
    """Processing phase of a case. Declaration order is the display order."""

    KNOWLEDGE = "Knowledge"
    APPELLATE = "Appellate"
    EXECUTION = "Execution"


class RiskLevel(str, Enum):
    """Prognosis classification. Declaration order is the display order."""

    REMOTE = "Remote"
    POSSIBLE = "Possible"
    PROBABLE = "Probable"


DEFAULT_PHASE = Phase.KNOWLEDGE
DEFAULT_RISK_LEVEL = RiskLevel.REMOTE


def parse_company(value: str) -> Company:
    """Return the Company for a stored value, falling back to OTHER."""
    try:
        return Company(value)
    except ValueError:
        return Company.OTHER


def parse_phase(value: str) -> Phase:
    """Return the Phase for a stored value, falling back to the default phase."""
    try:
        return Phase(value)
    except ValueError:
        return DEFAULT_PHASE


def parse_risk_level(value: str) -> RiskLevel:
    """Return the RiskLevel for a stored value, falling back to the default level."""
    try:
        return RiskLevel(value)
    except ValueError:
        return DEFAULT_RISK_LEVEL


@dataclass(frozen=True)
class NormalizedCase:
    """
    One case after normalization. Each spreadsheet row yields exactly one.

    ``phase_recognized`` and ``risk_recognized`` are False when the source
    label matched no marker and the default bucket was applied.
    """

    company: Company
    phase: Phase
    risk_level: RiskLevel
    total_value: int
    case_count: int = 1
    phase_recognized: bool = True
    risk_recognized: bool = True
    id: uuid.UUID = field(default_factory=uuid.uuid4)
