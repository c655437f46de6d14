from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class LoadAuditRequest(BaseModel):
    """Raw load report text plus optional policy overrides."""

    report: str
    weekly_hour_cap: int | None = Field(default=None, ge=1)
    daily_hour_cap: int | None = Field(default=None, ge=1)
    school_days: int | None = Field(default=None, ge=1)
    audited_level: str | None = None


class AuditPolicyOut(BaseModel):
    weekly_hour_cap: int
    daily_hour_cap: int
    school_days: int
    audited_level: str
    weekly_limit: int


class ClassLoadOut(BaseModel):
    class_id: str
    total_hours: int
    status: Literal["OK", "OVERLOAD", "UNDERLOAD"]


class PairLoadOut(BaseModel):
    teacher_id: str
    class_id: str
    total_hours: int
    status: Literal["OK", "IMPOSSIBLE"]
    average_per_day: float
    required_daily_cap: int


class LoadAuditResponse(BaseModel):
    policy: AuditPolicyOut
    classes: list[ClassLoadOut] = Field(default_factory=list)
    pairs: list[PairLoadOut] = Field(default_factory=list)
    skipped: int = 0
    has_blocking_issues: bool = False
    lines: list[str] = Field(default_factory=list)
