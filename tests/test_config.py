"""
tests/test_config.py

Pytest unit tests for environment-driven settings in app.config.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from app.config import get_company_tokens, get_ingestion_settings
from litigation.base import Company
from litigation.normalizer import CompanyTokens, RowNormalizer


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    get_company_tokens.cache_clear()
    get_ingestion_settings.cache_clear()
    yield
    get_company_tokens.cache_clear()
    get_ingestion_settings.cache_clear()


class TestIngestionSettings:
    def test_default_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SPREADSHEET_MAX_UPLOAD_MB", raising=False)
        settings = get_ingestion_settings()
        assert settings.max_upload_mb == 50
        assert settings.max_upload_bytes == 50 * 1024 * 1024

    def test_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPREADSHEET_MAX_UPLOAD_MB", "5")
        assert get_ingestion_settings().max_upload_bytes == 5 * 1024 * 1024

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_values_fall_back(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("SPREADSHEET_MAX_UPLOAD_MB", raw)
        assert get_ingestion_settings().max_upload_mb >= 1


class TestCompanyTokens:
    ENV_NAMES = (
        "COMPANY_OWN_ORIGIN",
        "COMPANY_MAIN_TOKENS",
        "COMPANY_PARTNER_A_CODE",
        "COMPANY_PARTNER_A_TOKENS",
        "COMPANY_PARTNER_B_TOKENS",
        "COMPANY_PARTNER_C_TOKENS",
    )

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in self.ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
        assert get_company_tokens() == CompanyTokens()

    def test_overrides_flow_into_normalizer(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMPANY_OWN_ORIGIN", "INTERNO")
        monkeypatch.setenv("COMPANY_MAIN_TOKENS", "ACME, ACME BR ,")
        monkeypatch.setenv("COMPANY_PARTNER_B_TOKENS", "BRAVO")

        tokens = get_company_tokens()
        assert tokens.own_origin == "INTERNO"
        assert tokens.main_tenant == ("ACME", "ACME BR")
        assert tokens.partner_b == ("BRAVO",)

        normalizer = RowNormalizer(tokens)
        assert normalizer.resolve_company("x", "interno") is Company.MAIN_TENANT
        assert normalizer.resolve_company("Bravo Ltda", "") is Company.PARTNER_B

    def test_blank_list_keeps_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMPANY_PARTNER_C_TOKENS", " , ")
        assert get_company_tokens().partner_c == CompanyTokens().partner_c
