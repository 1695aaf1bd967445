"""
litigation/normalizer.py

Deterministic mapping of free-text spreadsheet labels onto the closed
Company / Phase / RiskLevel enumerations.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

from litigation.base import DEFAULT_PHASE, DEFAULT_RISK_LEVEL, Company, Phase, RiskLevel

# Markers are compared against accent-folded, upper-cased labels.
_PHASE_MARKERS: tuple[tuple[str, Phase], ...] = (
    ("CONHECIMENTO", Phase.KNOWLEDGE),
    ("RECURSAL", Phase.APPELLATE),
    ("EXECU", Phase.EXECUTION),
)

_RISK_MARKERS: tuple[tuple[str, RiskLevel], ...] = (
    ("REMOTO", RiskLevel.REMOTE),
    ("POSS", RiskLevel.POSSIBLE),
    ("PROV", RiskLevel.PROBABLE),
)


def fold_label(value: object) -> str:
    """
    Return ``value`` trimmed, upper-cased and stripped of diacritics.

    ``None`` and other non-string values are coerced with ``str`` first;
    ``None`` becomes an empty string.
    """
    if value is None:
        return ""
    text = unicodedata.normalize("NFKD", str(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return text.strip().upper()


@dataclass(frozen=True)
class CompanyTokens:
    """
    Tenant-specific tokens used to recognise companies in free text.

    Defaults reproduce the brand tokens of the original deployment. All
    tokens are folded with :func:`fold_label` before comparison.
    """

    own_origin: str = "PRÓPRIO"
    main_tenant: tuple[str, ...] = ("V.TAL", "VTAL")
    partner_a_code: str = "OI"
    partner_a: tuple[str, ...] = ("OI",)
    partner_b: tuple[str, ...] = ("SEREDE",)
    partner_c: tuple[str, ...] = ("SPRINK",)


def _contains_any(label: str, tokens: tuple[str, ...]) -> bool:
    return any(token and fold_label(token) in label for token in tokens)


class RowNormalizer:
    """Stateless classifier for the four free-text fields of a raw row.

    Every comparison is case-insensitive, whitespace-trimmed and tolerant of
    accented variants. Unknown labels never raise; they resolve to the
    dimension's default bucket.
    """

    def __init__(self, tokens: CompanyTokens | None = None) -> None:
        self._tokens = tokens or CompanyTokens()

    @property
    def tokens(self) -> CompanyTokens:
        return self._tokens

    def resolve_company(self, company_label: object, origin_type: object) -> Company:
        """Resolve the responsible company.

        Precedence, first match wins:
            1. origin type is the "own" flag, or label has a main-tenant token
            2. origin type is the partner-A code, or label has a partner-A token
            3. label has a partner-B token
            4. label has a partner-C token
            5. Company.OTHER

        Args:
            company_label: Free-text company column.
            origin_type: Free-text origin-type column.

        Returns:
            The resolved Company.
        """
        label = fold_label(company_label)
        origin = fold_label(origin_type)
        tokens = self._tokens

        if origin == fold_label(tokens.own_origin) or _contains_any(label, tokens.main_tenant):
            return Company.MAIN_TENANT
        if origin == fold_label(tokens.partner_a_code) or _contains_any(label, tokens.partner_a):
            return Company.PARTNER_A
        if _contains_any(label, tokens.partner_b):
            return Company.PARTNER_B
        if _contains_any(label, tokens.partner_c):
            return Company.PARTNER_C
        return Company.OTHER

    def match_phase(self, phase_label: object) -> Phase | None:
        """Return the Phase whose marker appears in the label, or None."""
        label = fold_label(phase_label)
        for marker, phase in _PHASE_MARKERS:
            if marker in label:
                return phase
        return None

    def match_risk(self, risk_label: object) -> RiskLevel | None:
        """Return the RiskLevel whose marker appears in the label, or None."""
        label = fold_label(risk_label)
        for marker, level in _RISK_MARKERS:
            if marker in label:
                return level
        return None

    def resolve_phase(self, phase_label: object) -> Phase:
        """Resolve a phase label, defaulting to Knowledge."""
        return self.match_phase(phase_label) or DEFAULT_PHASE

    def resolve_risk(self, risk_label: object) -> RiskLevel:
        """Resolve a prognosis label, defaulting to Remote."""
        return self.match_risk(risk_label) or DEFAULT_RISK_LEVEL

    def normalize(
        self,
        *,
        company_label: object,
        origin_type: object,
        phase_label: object,
        risk_label: object,
    ) -> tuple[Company, Phase, RiskLevel]:
        """Return the (company, phase, risk) triple for one row."""
        return (
            self.resolve_company(company_label, origin_type),
            self.resolve_phase(phase_label),
            self.resolve_risk(risk_label),
        )
