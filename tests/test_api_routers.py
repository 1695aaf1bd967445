"""
tests/test_api_routers.py

HTTP contract tests for the liability, court and favorability routers.

Each test mounts the routers on a bare FastAPI app and overrides the
database session and service dependencies, so no database is touched.

Coverage
--------
- camelCase field names and Portuguese top-level keys
- Period query validation (pairing, ranges)
- Domain error to HTTP status mapping (400, 404, 413, 422, 500)
- Upload extension validation
- Court table and case-number resolution
- Judge / judgment CRUD status codes
- Favorability reports per judge, court, chamber and state
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from dataclasses import replace
from datetime import date, datetime, timezone
from types import SimpleNamespace
from typing import BinaryIO

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers import court_router, favorability_router, liability_router
from app.domain.snapshot import ImportSummary, ReferencePeriod
from app.services.favorability_service import (
    JudgeFavorability,
    JudgeNotFoundError,
    JudgmentNotFoundError,
    InvalidJudgeError,
    get_favorability_service,
)
from app.services.liability_service import (
    SnapshotComparison,
    SnapshotNotFoundError,
    SnapshotView,
    get_liability_service,
)
from app.services.spreadsheet_ingestion_service import (
    SnapshotPersistenceError,
    SpreadsheetReadError,
    UploadTooLargeError,
    get_spreadsheet_ingestion_service,
)
from db.session import get_db
from litigation.aggregation import AggregationEngine
from litigation.base import Company, NormalizedCase, Phase, RiskLevel
from litigation.comparison import compare_views
from litigation.favorability import (
    ChamberFavorability,
    CourtFavorabilityReport,
    JudgmentFact,
    Outcome,
    StateFavorability,
    compute_stats,
    stats_by_chamber,
    stats_by_court,
    stats_by_state,
)

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

CASES = [
    NormalizedCase(Company.MAIN_TENANT, Phase.KNOWLEDGE, RiskLevel.REMOTE, 1000),
    NormalizedCase(Company.PARTNER_B, Phase.APPELLATE, RiskLevel.PROBABLE, 3000, risk_recognized=False),
]


def _override_db() -> Iterator[None]:
    yield None


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class _FakeLiabilityService:
    def __init__(self) -> None:
        self.periods = {ReferencePeriod(2026, 8): CASES[:1], ReferencePeriod(2026, 9): CASES}

    def _resolve(self, period: ReferencePeriod | None) -> ReferencePeriod:
        if period is None:
            return max(self.periods)
        if period not in self.periods:
            raise SnapshotNotFoundError(f"No snapshot for period {period.label}.")
        return period

    def get_view(self, *, db: object, period: ReferencePeriod | None = None) -> SnapshotView:
        resolved = self._resolve(period)
        return SnapshotView(period=resolved, view=AggregationEngine().aggregate(self.periods[resolved]))

    def get_cases(
        self, *, db: object, period: ReferencePeriod | None = None
    ) -> tuple[ReferencePeriod, list[NormalizedCase]]:
        resolved = self._resolve(period)
        return resolved, self.periods[resolved]

    def list_snapshots(self, *, db: object) -> list[SimpleNamespace]:
        return [
            SimpleNamespace(reference_month=p.month, reference_year=p.year, record_count=len(c), source_filename=None)
            for p, c in sorted(self.periods.items(), reverse=True)
        ]

    def compare(self, *, db: object, base: ReferencePeriod, target: ReferencePeriod) -> SnapshotComparison:
        base_view = self.get_view(db=db, period=base)
        target_view = self.get_view(db=db, period=target)
        return SnapshotComparison(
            base=base_view,
            target=target_view,
            diff=compare_views(base_view.view, target_view.view),
        )


class _FakeIngestionService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[dict[str, object]] = []

    def import_snapshot(
        self,
        *,
        source: BinaryIO,
        period: ReferencePeriod,
        db: object,
        filename: str | None = None,
    ) -> ImportSummary:
        self.calls.append({"content": source.read(), "period": period, "filename": filename})
        if self.error is not None:
            raise self.error
        return ImportSummary(period=period, records_loaded=2, replaced=True, source_filename=filename)


def _judge(name: str = "Ana", court_code: str = "09") -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        court_code=court_code,
        chamber="1ª Vara do Trabalho",
        kind="first_instance",
        created_at=NOW,
    )


def _judgment(judge_id: uuid.UUID, outcome: str = "favorable") -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid.uuid4(),
        judge_id=judge_id,
        case_number="0001380-35.2023.5.09.0662",
        outcome=outcome,
        judged_on=None,
        party=None,
        created_at=NOW,
    )


class _FakeFavorabilityService:
    def __init__(self) -> None:
        self.judge = _judge()
        self.facts = [
            JudgmentFact(self.judge.id, "0001380-35.2023.5.09.0662", Outcome.FAVORABLE),
            JudgmentFact(self.judge.id, "0001380-35.2023.5.02.0662", Outcome.PARTIAL),
            JudgmentFact(self.judge.id, "abc", Outcome.UNFAVORABLE),
        ]

    def judges_with_favorability(self, *, db: object) -> list[JudgeFavorability]:
        return [JudgeFavorability(judge=self.judge, stats=compute_stats(f.outcome for f in self.facts))]

    def court_report(self, *, db: object) -> CourtFavorabilityReport:
        return stats_by_court(self.facts)

    def state_report(self, *, db: object) -> tuple[StateFavorability, ...]:
        return stats_by_state(stats_by_court(self.facts).courts)

    def chamber_report(self, *, db: object) -> tuple[ChamberFavorability, ...]:
        return stats_by_chamber(
            replace(fact, judge_court_code=self.judge.court_code, judge_chamber=self.judge.chamber)
            for fact in self.facts
        )

    def create_judge(
        self, *, db: object, name: str, court_code: str, kind: str, chamber: str | None = None
    ) -> SimpleNamespace:
        if court_code == "99":
            raise InvalidJudgeError("Unknown court code '99'.")
        return _judge(name=name, court_code=court_code)

    def delete_judge(self, *, db: object, judge_id: uuid.UUID) -> None:
        if judge_id != self.judge.id:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")

    def list_judgments(self, *, db: object, judge_id: uuid.UUID) -> list[SimpleNamespace]:
        if judge_id != self.judge.id:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")
        return [_judgment(judge_id)]

    def record_judgment(
        self,
        *,
        db: object,
        judge_id: uuid.UUID,
        case_number: str,
        outcome: Outcome,
        judged_on: date | None = None,
        party: str | None = None,
    ) -> SimpleNamespace:
        if judge_id != self.judge.id:
            raise JudgeNotFoundError(f"Judge {judge_id} not found.")
        return _judgment(judge_id, outcome.value)

    def update_judgment(self, *, db: object, judgment_id: uuid.UUID, **changes: object) -> SimpleNamespace:
        raise JudgmentNotFoundError(f"Judgment {judgment_id} not found.")

    def delete_judgment(self, *, db: object, judgment_id: uuid.UUID) -> None:
        raise JudgmentNotFoundError(f"Judgment {judgment_id} not found.")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def application() -> FastAPI:
    app = FastAPI()
    app.include_router(liability_router)
    app.include_router(court_router)
    app.include_router(favorability_router)
    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_liability_service] = _FakeLiabilityService
    app.dependency_overrides[get_favorability_service] = _FakeFavorabilityService
    return app


@pytest.fixture()
def client(application: FastAPI) -> TestClient:
    return TestClient(application)


def _with_ingestion(application: FastAPI, service: _FakeIngestionService) -> TestClient:
    application.dependency_overrides[get_spreadsheet_ingestion_service] = lambda: service
    return TestClient(application)


# ---------------------------------------------------------------------------
# Liability
# ---------------------------------------------------------------------------


class TestLiabilityView:
    def test_latest_view_shape(self, client: TestClient) -> None:
        response = client.get("/api/passivo")
        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"period", "fases", "riscos", "empresas", "summary", "dataQuality"}
        assert body["period"] == {"month": 9, "year": 2026, "label": "09/2026"}
        assert [item["phase"] for item in body["fases"]] == ["Knowledge", "Appellate", "Execution"]
        assert [item["riskLevel"] for item in body["riscos"]] == ["Remote", "Possible", "Probable"]
        assert body["dataQuality"] == {"unrecognizedPhase": 0, "unrecognizedRisk": 1}

    def test_camel_case_fields(self, client: TestClient) -> None:
        body = client.get("/api/passivo").json()
        assert body["fases"][1] == {
            "phase": "Appellate",
            "processCount": 1,
            "percentOfProcesses": 50,
            "totalValue": 3000,
            "percentOfValue": 75,
            "averageTicket": 3000,
        }
        assert body["summary"] == {
            "totalProcesses": 2,
            "totalLiability": 4000,
            "globalAverageTicket": 2000,
            "percentProbableRisk": 50,
            "percentAppellatePhase": 50,
        }
        partner_b = body["empresas"][1]
        assert partner_b["company"] == "PartnerB"
        assert partner_b["appellate"] == {"processCount": 1, "value": 3000, "percentOfValue": 100}
        assert partner_b["total"] == {
            "processCount": 1,
            "percentOfProcesses": 50,
            "value": 3000,
            "percentOfValue": 75,
        }

    def test_view_for_period(self, client: TestClient) -> None:
        body = client.get("/api/passivo", params={"month": 8, "year": 2026}).json()
        assert body["summary"]["totalProcesses"] == 1

    def test_unknown_period_is_404(self, client: TestClient) -> None:
        response = client.get("/api/passivo", params={"month": 1, "year": 2020})
        assert response.status_code == 404
        assert "01/2020" in response.json()["detail"]

    def test_month_without_year_is_422(self, client: TestClient) -> None:
        assert client.get("/api/passivo", params={"month": 8}).status_code == 422

    def test_month_out_of_range_is_422(self, client: TestClient) -> None:
        assert client.get("/api/passivo", params={"month": 13, "year": 2026}).status_code == 422

    def test_raw_records(self, client: TestClient) -> None:
        body = client.get("/api/passivo/raw").json()
        assert body["period"]["label"] == "09/2026"
        assert len(body["records"]) == 2
        first = body["records"][0]
        assert first["company"] == "MainTenant"
        assert first["riskLevel"] == "Remote"
        assert first["caseCount"] == 1
        assert first["totalValue"] == 1000
        assert first["phaseRecognized"] is True
        assert uuid.UUID(first["id"])

    def test_periods(self, client: TestClient) -> None:
        body = client.get("/api/passivo/periodos").json()
        assert [item["label"] for item in body] == ["09/2026", "08/2026"]
        assert body[0]["recordCount"] == 2

    def test_compare(self, client: TestClient) -> None:
        response = client.get(
            "/api/passivo/comparar",
            params={"mes1": 8, "ano1": 2026, "mes2": 9, "ano2": 2026},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["base"]["period"]["label"] == "08/2026"
        assert body["target"]["period"]["label"] == "09/2026"
        assert body["diff"] == {
            "processCount": 1,
            "percentProcesses": 100,
            "totalValue": 3000,
            "percentValue": 300,
        }

    def test_compare_missing_period(self, client: TestClient) -> None:
        response = client.get(
            "/api/passivo/comparar",
            params={"mes1": 1, "ano1": 2020, "mes2": 9, "ano2": 2026},
        )
        assert response.status_code == 404

    def test_compare_requires_all_params(self, client: TestClient) -> None:
        assert client.get("/api/passivo/comparar", params={"mes1": 8, "ano1": 2026}).status_code == 422


class TestUpload:
    def test_upload(self, application: FastAPI) -> None:
        service = _FakeIngestionService()
        client = _with_ingestion(application, service)
        response = client.post(
            "/api/passivo/upload",
            params={"month": 9, "year": 2026},
            files={"file": ("cases.xlsx", b"PK-fake", XLSX_TYPE)},
        )
        assert response.status_code == 200
        assert response.json() == {
            "period": {"month": 9, "year": 2026, "label": "09/2026"},
            "recordsLoaded": 2,
            "replaced": True,
            "sourceFilename": "cases.xlsx",
        }
        assert service.calls[0]["content"] == b"PK-fake"
        assert service.calls[0]["period"] == ReferencePeriod(2026, 9)

    def test_rejects_other_extensions(self, application: FastAPI) -> None:
        client = _with_ingestion(application, _FakeIngestionService())
        response = client.post(
            "/api/passivo/upload",
            params={"month": 9, "year": 2026},
            files={"file": ("notes.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 400

    def test_requires_period(self, application: FastAPI) -> None:
        client = _with_ingestion(application, _FakeIngestionService())
        response = client.post("/api/passivo/upload", files={"file": ("cases.xlsx", b"x", XLSX_TYPE)})
        assert response.status_code == 422

    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (SpreadsheetReadError("Spreadsheet contains no valid case rows."), 400),
            (UploadTooLargeError("too big"), 413),
            (SnapshotPersistenceError("db down"), 500),
        ],
    )
    def test_error_mapping(self, application: FastAPI, error: Exception, status_code: int) -> None:
        client = _with_ingestion(application, _FakeIngestionService(error))
        response = client.post(
            "/api/passivo/upload",
            params={"month": 9, "year": 2026},
            files={"file": ("cases.csv", b"a,b", "text/csv")},
        )
        assert response.status_code == status_code


# ---------------------------------------------------------------------------
# Courts
# ---------------------------------------------------------------------------


class TestCourts:
    def test_list(self, client: TestClient) -> None:
        body = client.get("/api/tribunais").json()
        assert len(body) == 24
        assert body[8] == {
            "code": "09",
            "name": "TRT 9",
            "state": "Paraná",
            "stateAbbrev": "PR",
            "region": "Sul",
        }

    def test_regions(self, client: TestClient) -> None:
        body = client.get("/api/tribunais/regioes").json()
        regions = [item["region"] for item in body]
        assert regions == sorted(regions)
        assert sum(len(item["courts"]) for item in body) == 24

    def test_resolve(self, client: TestClient) -> None:
        body = client.get("/api/tribunais/resolver", params={"numero": "00013803520235090662"}).json()
        assert body["courtCode"] == "09"
        assert body["state"] == "Paraná"
        assert body["caseNumber"] == "00013803520235090662"

    def test_resolve_garbage_is_null(self, client: TestClient) -> None:
        response = client.get("/api/tribunais/resolver", params={"numero": "abc"})
        assert response.status_code == 200
        body = response.json()
        assert body["courtCode"] is None
        assert body["courtName"] is None
        assert body["region"] is None


# ---------------------------------------------------------------------------
# Favorability
# ---------------------------------------------------------------------------


class TestFavorability:
    def test_judges(self, client: TestClient) -> None:
        body = client.get("/api/favorabilidade/juizes").json()
        assert body[0]["judge"]["courtCode"] == "09"
        assert body[0]["stats"] == {
            "total": 3,
            "favorable": 1,
            "unfavorable": 1,
            "partial": 1,
            "percentFavorable": 50,
            "percentUnfavorable": 50,
        }

    def test_courts(self, client: TestClient) -> None:
        body = client.get("/api/favorabilidade/tribunais").json()
        assert [court["courtCode"] for court in body["courts"]] == ["02", "09"]
        assert body["unresolved"] == 1

    def test_states(self, client: TestClient) -> None:
        body = client.get("/api/favorabilidade/estados").json()
        assert [state["stateAbbrev"] for state in body] == ["PR", "SP"]
        assert body[1]["stats"]["percentFavorable"] == 50

    def test_chambers(self, client: TestClient) -> None:
        body = client.get("/api/favorabilidade/varas").json()
        assert body == [
            {
                "courtCode": "09",
                "courtName": "TRT 9",
                "stateAbbrev": "PR",
                "chamber": "1ª Vara do Trabalho",
                "judgeCount": 1,
                "stats": {
                    "total": 3,
                    "favorable": 1,
                    "unfavorable": 1,
                    "partial": 1,
                    "percentFavorable": 50,
                    "percentUnfavorable": 50,
                },
            }
        ]

    def test_create_judge(self, client: TestClient) -> None:
        response = client.post(
            "/api/juizes",
            json={"name": "Bruno", "courtCode": "4", "kind": "appellate"},
        )
        assert response.status_code == 201
        assert response.json()["courtCode"] == "04"

    def test_create_judge_unknown_court(self, client: TestClient) -> None:
        response = client.post("/api/juizes", json={"name": "Bruno", "courtCode": "99"})
        assert response.status_code == 422

    def test_create_judge_invalid_kind(self, client: TestClient) -> None:
        response = client.post("/api/juizes", json={"name": "Bruno", "courtCode": "04", "kind": "supreme"})
        assert response.status_code == 422

    def test_delete_unknown_judge(self, client: TestClient) -> None:
        assert client.delete(f"/api/juizes/{uuid.uuid4()}").status_code == 404

    def test_list_judgments_unknown_judge(self, client: TestClient) -> None:
        assert client.get(f"/api/juizes/{uuid.uuid4()}/julgamentos").status_code == 404

    def test_create_judgment_invalid_outcome(self, client: TestClient) -> None:
        response = client.post(
            "/api/julgamentos",
            json={"judgeId": str(uuid.uuid4()), "caseNumber": "x", "outcome": "won"},
        )
        assert response.status_code == 422

    def test_create_judgment_unknown_judge(self, client: TestClient) -> None:
        response = client.post(
            "/api/julgamentos",
            json={"judgeId": str(uuid.uuid4()), "caseNumber": "x", "outcome": "partial"},
        )
        assert response.status_code == 404

    def test_update_and_delete_unknown_judgment(self, client: TestClient) -> None:
        missing = uuid.uuid4()
        assert client.patch(f"/api/julgamentos/{missing}", json={"outcome": "favorable"}).status_code == 404
        assert client.delete(f"/api/julgamentos/{missing}").status_code == 404
