"""
tests/test_favorability.py

Pytest unit tests for litigation.favorability.

Coverage
--------
- Percentages with partial outcomes at half weight
- Zero-judgment guard
- Court attribution: case number first, judge court as fallback
- Unresolved judgments
- Per-judge, per-chamber and per-state grouping
"""

from __future__ import annotations

import pytest

from litigation.favorability import (
    JudgmentFact,
    Outcome,
    compute_stats,
    resolve_judgment_court,
    stats_by_chamber,
    stats_by_court,
    stats_by_judge,
    stats_by_state,
)

PARANA_CASE = "0001380-35.2023.5.09.0662"
CAPITAL_SP_CASE = "0001380-35.2023.5.02.0662"
INTERIOR_SP_CASE = "0001380-35.2023.5.15.0662"


def _fact(judge: str, case_number: str, outcome: Outcome, court: str | None = None) -> JudgmentFact:
    return JudgmentFact(judge_id=judge, case_number=case_number, outcome=outcome, judge_court_code=court)


class TestComputeStats:
    def test_partial_counts_half_each_side(self) -> None:
        stats = compute_stats([Outcome.FAVORABLE, Outcome.UNFAVORABLE, Outcome.PARTIAL, Outcome.PARTIAL])
        assert stats.total == 4
        assert (stats.favorable, stats.unfavorable, stats.partial) == (1, 1, 2)
        assert stats.percent_favorable == pytest.approx(50.0)
        assert stats.percent_unfavorable == pytest.approx(50.0)

    def test_all_favorable(self) -> None:
        stats = compute_stats([Outcome.FAVORABLE] * 3)
        assert stats.percent_favorable == pytest.approx(100.0)
        assert stats.percent_unfavorable == 0.0

    def test_single_partial(self) -> None:
        stats = compute_stats([Outcome.PARTIAL])
        assert stats.percent_favorable == pytest.approx(50.0)
        assert stats.percent_unfavorable == pytest.approx(50.0)

    def test_empty(self) -> None:
        stats = compute_stats([])
        assert stats.total == 0
        assert stats.percent_favorable == 0.0
        assert stats.percent_unfavorable == 0.0


class TestCourtAttribution:
    def test_case_number_wins(self) -> None:
        assert resolve_judgment_court(_fact("j", PARANA_CASE, Outcome.FAVORABLE, court="02")) == "09"

    def test_judge_court_fallback(self) -> None:
        assert resolve_judgment_court(_fact("j", "abc", Outcome.FAVORABLE, court="2")) == "02"

    def test_unknown_case_court_falls_back(self) -> None:
        fact = _fact("j", "0001380-35.2023.5.99.0662", Outcome.FAVORABLE, court="04")
        assert resolve_judgment_court(fact) == "04"

    def test_unresolvable(self) -> None:
        assert resolve_judgment_court(_fact("j", "abc", Outcome.FAVORABLE)) is None


class TestGrouping:
    @pytest.fixture()
    def facts(self) -> list[JudgmentFact]:
        return [
            _fact("ana", PARANA_CASE, Outcome.FAVORABLE),
            _fact("ana", PARANA_CASE, Outcome.UNFAVORABLE),
            _fact("bruno", CAPITAL_SP_CASE, Outcome.PARTIAL),
            _fact("bruno", INTERIOR_SP_CASE, Outcome.FAVORABLE),
            _fact("carla", "sem numero", Outcome.UNFAVORABLE),
        ]

    def test_by_judge(self, facts: list[JudgmentFact]) -> None:
        by_judge = stats_by_judge(facts)
        assert set(by_judge) == {"ana", "bruno", "carla"}
        assert by_judge["ana"].percent_favorable == pytest.approx(50.0)
        assert by_judge["bruno"].percent_favorable == pytest.approx(75.0)
        assert by_judge["carla"].total == 1

    def test_by_court_sorted_with_unresolved(self, facts: list[JudgmentFact]) -> None:
        report = stats_by_court(facts)
        assert [court.court_code for court in report.courts] == ["02", "09", "15"]
        assert report.unresolved == 1
        parana = report.courts[1]
        assert parana.court_name == "TRT 9"
        assert parana.state_abbrev == "PR"
        assert parana.region == "Sul"
        assert parana.stats.total == 2

    def test_by_state_sums_courts(self, facts: list[JudgmentFact]) -> None:
        states = stats_by_state(stats_by_court(facts).courts)
        assert [state.state_abbrev for state in states] == ["PR", "SP"]
        sao_paulo = states[1]
        assert sao_paulo.court_codes == ("02", "15")
        assert sao_paulo.stats.total == 2
        assert sao_paulo.stats.partial == 1
        assert sao_paulo.stats.percent_favorable == pytest.approx(75.0)

    def test_empty_inputs(self) -> None:
        assert stats_by_judge([]) == {}
        report = stats_by_court([])
        assert report.courts == ()
        assert report.unresolved == 0
        assert stats_by_state(()) == ()


class TestChamberGrouping:
    def test_groups_by_judge_court_and_chamber(self) -> None:
        facts = [
            JudgmentFact("ana", PARANA_CASE, Outcome.FAVORABLE, judge_court_code="09", judge_chamber="1ª Vara de Curitiba"),
            JudgmentFact("bia", "abc", Outcome.PARTIAL, judge_court_code="9", judge_chamber=" 1ª Vara  de Curitiba "),
            JudgmentFact("caio", CAPITAL_SP_CASE, Outcome.UNFAVORABLE, judge_court_code="02", judge_chamber="3ª Turma"),
        ]

        chambers = stats_by_chamber(facts)

        assert [(item.court_code, item.chamber) for item in chambers] == [
            ("02", "3ª Turma"),
            ("09", "1ª Vara de Curitiba"),
        ]
        curitiba = chambers[1]
        assert curitiba.judge_count == 2
        assert curitiba.state_abbrev == "PR"
        assert curitiba.stats.total == 2
        assert curitiba.stats.percent_favorable == pytest.approx(75.0)

    def test_chamber_follows_judge_court_not_case_number(self) -> None:
        fact = JudgmentFact("ana", CAPITAL_SP_CASE, Outcome.FAVORABLE, judge_court_code="09", judge_chamber="2ª Vara")
        assert stats_by_chamber([fact])[0].court_code == "09"

    def test_chamber_names_sort_case_insensitively(self) -> None:
        facts = [
            JudgmentFact("ana", "abc", Outcome.FAVORABLE, judge_court_code="04", judge_chamber="vara b"),
            JudgmentFact("bia", "abc", Outcome.FAVORABLE, judge_court_code="04", judge_chamber="Vara A"),
        ]
        assert [item.chamber for item in stats_by_chamber(facts)] == ["Vara A", "vara b"]

    def test_judges_without_chamber_or_court_are_skipped(self) -> None:
        facts = [
            JudgmentFact("ana", PARANA_CASE, Outcome.FAVORABLE, judge_court_code="09"),
            JudgmentFact("bia", PARANA_CASE, Outcome.FAVORABLE, judge_court_code="09", judge_chamber="   "),
            JudgmentFact("caio", PARANA_CASE, Outcome.FAVORABLE, judge_court_code="99", judge_chamber="1ª Vara"),
        ]
        assert stats_by_chamber(facts) == ()
