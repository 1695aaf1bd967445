"""
litigation/case_number.py

Court resolution for unified judicial process numbers.

Canonical layout: ``NNNNNNN-DD.AAAA.J.TT.OOOO`` (20 digits once separators
are removed). ``TT`` is the regional labor court code, which this module
maps to a court, a state and a region. Every public function tolerates
arbitrary input and returns ``None`` instead of raising.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass

_CANONICAL_PATTERN = re.compile(r"\d{7}-\d{2}\.\d{4}\.\d\.(\d{2})\.\d{4}")
_NON_DIGIT = re.compile(r"\D")

# Offset of TT inside NNNNNNN DD AAAA J TT OOOO.
_COURT_CODE_SLICE = slice(14, 16)
_MIN_DIGITS = 18


@dataclass(frozen=True)
class CourtInfo:
    code: str
    name: str
    state: str
    state_abbrev: str
    region: str


@dataclass(frozen=True)
class ParsedCaseNumber:
    """Nullable structured view of a case number's court of origin."""

    court_code: str | None = None
    court_name: str | None = None
    state: str | None = None
    state_abbrev: str | None = None
    region: str | None = None

    @property
    def resolved(self) -> bool:
        return self.court_name is not None


def _court(code: str, state: str, state_abbrev: str, region: str) -> CourtInfo:
    return CourtInfo(
        code=code,
        name=f"TRT {int(code)}",
        state=state,
        state_abbrev=state_abbrev,
        region=region,
    )


COURTS: dict[str, CourtInfo] = {
    info.code: info
    for info in (
        _court("01", "Rio de Janeiro", "RJ", "Sudeste"),
        _court("02", "São Paulo", "SP", "Sudeste"),
        _court("03", "Minas Gerais", "MG", "Sudeste"),
        _court("04", "Rio Grande do Sul", "RS", "Sul"),
        _court("05", "Bahia", "BA", "Nordeste"),
        _court("06", "Pernambuco", "PE", "Nordeste"),
        _court("07", "Ceará", "CE", "Nordeste"),
        _court("08", "Pará", "PA", "Norte"),
        _court("09", "Paraná", "PR", "Sul"),
        _court("10", "Distrito Federal", "DF", "Centro-Oeste"),
        _court("11", "Amazonas", "AM", "Norte"),
        _court("12", "Santa Catarina", "SC", "Sul"),
        _court("13", "Paraíba", "PB", "Nordeste"),
        _court("14", "Rondônia", "RO", "Norte"),
        _court("15", "São Paulo Interior", "SP", "Sudeste"),
        _court("16", "Maranhão", "MA", "Nordeste"),
        _court("17", "Espírito Santo", "ES", "Sudeste"),
        _court("18", "Goiás", "GO", "Centro-Oeste"),
        _court("19", "Alagoas", "AL", "Nordeste"),
        _court("20", "Sergipe", "SE", "Nordeste"),
        _court("21", "Rio Grande do Norte", "RN", "Nordeste"),
        _court("22", "Piauí", "PI", "Nordeste"),
        _court("23", "Mato Grosso", "MT", "Centro-Oeste"),
        _court("24", "Mato Grosso do Sul", "MS", "Centro-Oeste"),
    )
}


def extract_court_code(case_number: object) -> str | None:
    """
    Extract the 2-digit court code from a case number.

    The punctuated canonical pattern is tried first. Otherwise every
    non-digit is stripped and, when at least 18 digits remain, the code is
    read from its fixed offset in the 20-digit layout.
    """
    if not isinstance(case_number, str) or not case_number:
        return None

    match = _CANONICAL_PATTERN.search(case_number)
    if match:
        return match.group(1)

    digits = _NON_DIGIT.sub("", case_number)
    if len(digits) >= _MIN_DIGITS:
        return digits[_COURT_CODE_SLICE]
    return None


def get_court_info(case_number: object) -> CourtInfo | None:
    code = extract_court_code(case_number)
    if code is None:
        return None
    return COURTS.get(code)


def get_court_by_code(code: object) -> CourtInfo | None:
    if not isinstance(code, str):
        return None
    return COURTS.get(code.strip().zfill(2))


def get_state(case_number: object) -> str | None:
    info = get_court_info(case_number)
    return info.state if info else None


def get_state_abbrev(case_number: object) -> str | None:
    info = get_court_info(case_number)
    return info.state_abbrev if info else None


def get_region(case_number: object) -> str | None:
    info = get_court_info(case_number)
    return info.region if info else None


def parse_case_number(case_number: object) -> ParsedCaseNumber:
    """
    Return every derived field for ``case_number``.

    ``court_code`` is populated whenever a code could be extracted, even if
    it is not in the court table; the remaining fields are ``None`` unless
    the code resolves.
    """
    code = extract_court_code(case_number)
    info = COURTS.get(code) if code else None
    if info is None:
        return ParsedCaseNumber(court_code=code)
    return ParsedCaseNumber(
        court_code=info.code,
        court_name=info.name,
        state=info.state,
        state_abbrev=info.state_abbrev,
        region=info.region,
    )


def courts_by_region() -> dict[str, list[CourtInfo]]:
    """Group the court table by region, regions and courts in sorted order."""
    grouped: dict[str, list[CourtInfo]] = defaultdict(list)
    for code in sorted(COURTS):
        info = COURTS[code]
        grouped[info.region].append(info)
    return {region: grouped[region] for region in sorted(grouped)}
