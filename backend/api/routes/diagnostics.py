from __future__ import annotations

from fastapi import APIRouter, HTTPException

from core.config import settings
from diagnostics.load_auditor import AuditPolicy, audit, render_report, summarize
from diagnostics.load_report import parse_load_report
from schemas.diagnostics import LoadAuditRequest, LoadAuditResponse


router = APIRouter()


@router.post("/load-audit", response_model=LoadAuditResponse)
def load_audit(payload: LoadAuditRequest) -> LoadAuditResponse:
    try:
        policy = AuditPolicy.from_settings(
            settings,
            weekly_hour_cap=payload.weekly_hour_cap,
            daily_hour_cap=payload.daily_hour_cap,
            school_days=payload.school_days,
            audited_level=payload.audited_level,
        )
    except ValueError:
        raise HTTPException(status_code=400, detail="UNKNOWN_LEVEL")

    parsed = parse_load_report(
        payload.report,
        delimiter=settings.load_report_delimiter,
        min_fields=settings.load_report_min_fields,
    )
    report = audit(parsed, policy)
    return LoadAuditResponse(**summarize(report), lines=render_report(report))
