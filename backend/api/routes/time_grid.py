from __future__ import annotations

from fastapi import APIRouter

from api.deps import parse_level
from models.time_grid import days_of, format_time_range, periods_for
from schemas.time_grid import ListDaysResponse, ListPeriodsResponse, TimePeriodOut


router = APIRouter()


@router.get("/days", response_model=ListDaysResponse)
def list_days() -> ListDaysResponse:
    return ListDaysResponse(days=list(days_of()))


@router.get("/{level}/periods", response_model=ListPeriodsResponse)
def list_periods(level: str) -> ListPeriodsResponse:
    resolved = parse_level(level)
    periods = periods_for(resolved)
    return ListPeriodsResponse(
        level=resolved.value if resolved is not None else "",
        periods=[
            TimePeriodOut(
                period=tp.period,
                start_time=tp.start_time,
                end_time=tp.end_time,
                time_range=format_time_range(tp),
                is_break=tp.is_break,
            )
            for tp in periods
        ],
    )
