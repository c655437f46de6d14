from __future__ import annotations

from pydantic import BaseModel, Field


class TimePeriodOut(BaseModel):
    period: str
    start_time: str
    end_time: str
    time_range: str
    is_break: bool = False


class ListPeriodsResponse(BaseModel):
    level: str
    periods: list[TimePeriodOut] = Field(default_factory=list)


class ListDaysResponse(BaseModel):
    days: list[str] = Field(default_factory=list)
