"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files
from litigation.normalizer import CompanyTokens


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_tuple_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items if items else default


@dataclass(frozen=True)
class IngestionSettings:
    """
    Runtime settings for spreadsheet ingestion.
    """

    max_upload_mb: int = 50

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache(maxsize=1)
def get_ingestion_settings() -> IngestionSettings:
    """
    Return cached spreadsheet ingestion settings from environment variables.
    """

    return IngestionSettings(
        max_upload_mb=max(1, _get_int_env("SPREADSHEET_MAX_UPLOAD_MB", 50)),
    )


@lru_cache(maxsize=1)
def get_company_tokens() -> CompanyTokens:
    """
    Return the tenant's company recognition tokens.

    Each variable overrides one token group; unset variables keep the
    defaults declared on CompanyTokens.
    """

    defaults = CompanyTokens()
    return CompanyTokens(
        own_origin=_get_str_env("COMPANY_OWN_ORIGIN", defaults.own_origin),
        main_tenant=_get_tuple_env("COMPANY_MAIN_TOKENS", defaults.main_tenant),
        partner_a_code=_get_str_env("COMPANY_PARTNER_A_CODE", defaults.partner_a_code),
        partner_a=_get_tuple_env("COMPANY_PARTNER_A_TOKENS", defaults.partner_a),
        partner_b=_get_tuple_env("COMPANY_PARTNER_B_TOKENS", defaults.partner_b),
        partner_c=_get_tuple_env("COMPANY_PARTNER_C_TOKENS", defaults.partner_c),
    )
