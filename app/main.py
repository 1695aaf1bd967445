from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    detail: str


def _validate_env() -> None:
    """
    Validate all required environment variables at startup.

    Runs before any service or database connection is initialised.
    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.

    Rules:
    - A PostgreSQL URL must be configured (SQLite is not permitted).
    - SPREADSHEET_MAX_UPLOAD_MB, when set, must be a positive integer.
    - LOG_LEVEL, when set, must name a standard logging level.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    # --- Database URL ---------------------------------------------------
    database_url = os.getenv("DATABASE_URL", "").strip()
    cloud_database_url = os.getenv("CLOUD_DATABASE_URL", "").strip()
    local_database_url = os.getenv("LOCAL_DATABASE_URL", "").strip()
    configured_url = database_url or cloud_database_url or local_database_url
    if not configured_url:
        errors.append(
            "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL "
            "or LOCAL_DATABASE_URL."
        )
    elif configured_url.lower().startswith("sqlite"):
        errors.append("SQLite is not supported. Configure a PostgreSQL database URL.")

    # --- Upload limit ---------------------------------------------------
    max_upload_raw = os.getenv("SPREADSHEET_MAX_UPLOAD_MB")
    if max_upload_raw is not None:
        try:
            if int(max_upload_raw) < 1:
                raise ValueError
        except ValueError:
            errors.append(
                f"SPREADSHEET_MAX_UPLOAD_MB='{max_upload_raw}' is not a positive integer."
            )

    # --- Log level ------------------------------------------------------
    log_level = os.getenv("LOG_LEVEL")
    if log_level is not None and not isinstance(getattr(logging, log_level.strip().upper(), None), int):
        errors.append(f"LOG_LEVEL='{log_level}' is not a valid logging level.")

    if errors:
        raise RuntimeError(
            "Startup validation failed; missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except SQLAlchemyError as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema() -> None:
    """
    Compare Base.metadata table names against the live DB schema.

    Every snapshot and favorability table must exist; startup aborts
    otherwise so migrations run before traffic is served. Does NOT
    auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        log = logging.getLogger(__name__)
        log.critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema on boot."""
    _check_db()
    logging.getLogger(__name__).info("Database connectivity confirmed")
    _check_schema()
    logging.getLogger(__name__).info("Database schema validated")
    yield


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Litigation Liability API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import court_router, favorability_router, liability_router

    application.include_router(liability_router)
    application.include_router(court_router)
    application.include_router(favorability_router)

    @application.get("/health")
    def healthcheck() -> HealthResponse:
        return HealthResponse(
            status="ok",
            detail="API initialized and database schema validated.",
        )

    return application


app = create_app()
