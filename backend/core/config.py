from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic.aliases import AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=BACKEND_DIR / ".env", env_file_encoding="utf-8", extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias=AliasChoices("environment", "ENVIRONMENT"))
    frontend_origin: str = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("frontend_origin", "FRONTEND_ORIGIN"),
    )
    log_level: str | None = Field(default=None, validation_alias=AliasChoices("log_level", "LOG_LEVEL"))
    log_dir: str | None = Field(default=None, validation_alias=AliasChoices("log_dir", "LOG_DIR"))

    # Load audit policy. Tied to a 45-period week; override per deployment.
    weekly_hour_cap: int = Field(
        default=45,
        validation_alias=AliasChoices("weekly_hour_cap", "WEEKLY_HOUR_CAP"),
    )
    daily_hour_cap: int = Field(
        default=3,
        validation_alias=AliasChoices("daily_hour_cap", "DAILY_HOUR_CAP"),
    )
    school_days: int = Field(
        default=5,
        validation_alias=AliasChoices("school_days", "SCHOOL_DAYS"),
    )
    audited_level: str = Field(
        default="Ortaokul",
        validation_alias=AliasChoices("audited_level", "AUDITED_LEVEL"),
    )

    # Load report input format
    load_report_delimiter: str = Field(
        default=";",
        validation_alias=AliasChoices("load_report_delimiter", "LOAD_REPORT_DELIMITER"),
    )
    load_report_min_fields: int = Field(
        default=6,
        validation_alias=AliasChoices("load_report_min_fields", "LOAD_REPORT_MIN_FIELDS"),
    )

    # Wizard sessions held in memory by the API process.
    max_sessions: int = Field(
        default=256,
        validation_alias=AliasChoices("max_sessions", "MAX_SESSIONS"),
    )

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, v: str) -> str:
        return (v or "development").strip().lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip().upper()
        if v not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError("LOG_LEVEL must be one of CRITICAL, ERROR, WARNING, INFO, DEBUG")
        return v

    @field_validator("frontend_origin")
    @classmethod
    def _normalize_frontend_origin(cls, v: str) -> str:
        # Starlette CORS expects the Origin to match exactly (no trailing slash).
        return v.strip().rstrip("/")

    @field_validator("weekly_hour_cap", "daily_hour_cap", "school_days", "load_report_min_fields", "max_sessions")
    @classmethod
    def _require_positive(cls, v: int) -> int:
        if int(v) < 1:
            raise ValueError("must be a positive integer")
        return int(v)

    @field_validator("audited_level")
    @classmethod
    def _normalize_audited_level(cls, v: str) -> str:
        from models.time_grid import Level

        return Level.parse(v).value

    @field_validator("load_report_delimiter")
    @classmethod
    def _check_delimiter(cls, v: str) -> str:
        # Intentionally not stripped: a tab is a valid delimiter.
        if not v:
            raise ValueError("LOAD_REPORT_DELIMITER must not be empty")
        return v


settings = Settings()
