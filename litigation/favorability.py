"""
litigation/favorability.py

Judge favorability statistics.

A judgment is favorable, unfavorable or partial. Partial outcomes count
half towards both sides:

    percent_favorable   = (favorable + 0.5 * partial) / total * 100
    percent_unfavorable = (unfavorable + 0.5 * partial) / total * 100

Court attribution uses the court resolved from the judgment's case number,
falling back to the judge's own court code. Chamber (vara) attribution always
uses the judge's own court.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from litigation.aggregation import percent
from litigation.case_number import COURTS, extract_court_code, get_court_by_code


class Outcome(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"
    PARTIAL = "partial"


@dataclass(frozen=True)
class JudgmentFact:
    """Minimal view of one recorded judgment needed for the statistics."""

    judge_id: object
    case_number: str
    outcome: Outcome
    judge_court_code: str | None = None
    judge_chamber: str | None = None


@dataclass(frozen=True)
class FavorabilityStats:
    total: int
    favorable: int
    unfavorable: int
    partial: int
    percent_favorable: float
    percent_unfavorable: float


@dataclass(frozen=True)
class CourtFavorability:
    court_code: str
    court_name: str
    state_abbrev: str
    region: str
    stats: FavorabilityStats


@dataclass(frozen=True)
class ChamberFavorability:
    court_code: str
    court_name: str
    state_abbrev: str
    chamber: str
    judge_count: int
    stats: FavorabilityStats


@dataclass(frozen=True)
class StateFavorability:
    state_abbrev: str
    court_codes: tuple[str, ...]
    stats: FavorabilityStats


@dataclass(frozen=True)
class CourtFavorabilityReport:
    courts: tuple[CourtFavorability, ...]
    unresolved: int


def compute_stats(outcomes: Iterable[Outcome]) -> FavorabilityStats:
    favorable = unfavorable = partial = 0
    for outcome in outcomes:
        if outcome is Outcome.FAVORABLE:
            favorable += 1
        elif outcome is Outcome.UNFAVORABLE:
            unfavorable += 1
        else:
            partial += 1
    return _stats(favorable, unfavorable, partial)


def _stats(favorable: int, unfavorable: int, partial: int) -> FavorabilityStats:
    total = favorable + unfavorable + partial
    return FavorabilityStats(
        total=total,
        favorable=favorable,
        unfavorable=unfavorable,
        partial=partial,
        percent_favorable=percent(favorable + 0.5 * partial, total),
        percent_unfavorable=percent(unfavorable + 0.5 * partial, total),
    )


def resolve_judgment_court(fact: JudgmentFact) -> str | None:
    """Return the court code a judgment counts towards, or None."""
    code = extract_court_code(fact.case_number)
    if code in COURTS:
        return code
    info = get_court_by_code(fact.judge_court_code)
    return info.code if info else None


def stats_by_judge(facts: Iterable[JudgmentFact]) -> dict[object, FavorabilityStats]:
    grouped: dict[object, list[Outcome]] = {}
    for fact in facts:
        grouped.setdefault(fact.judge_id, []).append(fact.outcome)
    return {judge_id: compute_stats(outcomes) for judge_id, outcomes in grouped.items()}


def stats_by_court(facts: Iterable[JudgmentFact]) -> CourtFavorabilityReport:
    """Group judgments by resolved court, ordered by court code."""
    grouped: dict[str, list[Outcome]] = {}
    unresolved = 0
    for fact in facts:
        code = resolve_judgment_court(fact)
        if code is None:
            unresolved += 1
            continue
        grouped.setdefault(code, []).append(fact.outcome)

    courts = tuple(
        CourtFavorability(
            court_code=code,
            court_name=COURTS[code].name,
            state_abbrev=COURTS[code].state_abbrev,
            region=COURTS[code].region,
            stats=compute_stats(grouped[code]),
        )
        for code in sorted(grouped)
    )
    return CourtFavorabilityReport(courts=courts, unresolved=unresolved)


def stats_by_chamber(facts: Iterable[JudgmentFact]) -> tuple[ChamberFavorability, ...]:
    """
    Group judgments by the judge's court and chamber, ordered by court code
    then chamber name. Judges without a chamber or a known court are skipped.
    """
    grouped: dict[tuple[str, str], list[Outcome]] = {}
    judges: dict[tuple[str, str], set[object]] = {}
    for fact in facts:
        chamber = " ".join((fact.judge_chamber or "").split())
        court = get_court_by_code(fact.judge_court_code)
        if not chamber or court is None:
            continue
        key = (court.code, chamber)
        grouped.setdefault(key, []).append(fact.outcome)
        judges.setdefault(key, set()).add(fact.judge_id)

    return tuple(
        ChamberFavorability(
            court_code=code,
            court_name=COURTS[code].name,
            state_abbrev=COURTS[code].state_abbrev,
            chamber=chamber,
            judge_count=len(judges[(code, chamber)]),
            stats=compute_stats(grouped[(code, chamber)]),
        )
        for code, chamber in sorted(grouped, key=lambda key: (key[0], key[1].casefold()))
    )


def stats_by_state(courts: Sequence[CourtFavorability]) -> tuple[StateFavorability, ...]:
    """Sum court statistics sharing a state abbreviation, ordered by state."""
    totals: dict[str, list[int]] = {}
    codes: dict[str, list[str]] = {}
    for court in courts:
        counts = totals.setdefault(court.state_abbrev, [0, 0, 0])
        counts[0] += court.stats.favorable
        counts[1] += court.stats.unfavorable
        counts[2] += court.stats.partial
        codes.setdefault(court.state_abbrev, []).append(court.court_code)

    return tuple(
        StateFavorability(
            state_abbrev=abbrev,
            court_codes=tuple(codes[abbrev]),
            stats=_stats(*totals[abbrev]),
        )
        for abbrev in sorted(totals)
    )
