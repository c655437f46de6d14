from __future__ import annotations

from fastapi import APIRouter

from api.routes import constraints, diagnostics, fixed_slots, sessions, time_grid


api_router = APIRouter()
api_router.include_router(time_grid.router, prefix="/time-grid", tags=["time-grid"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(constraints.router, prefix="/sessions/{session_id}/constraints", tags=["constraints"])
api_router.include_router(fixed_slots.router, prefix="/sessions/{session_id}/fixed-slots", tags=["fixed-slots"])
api_router.include_router(diagnostics.router, prefix="/diagnostics", tags=["diagnostics"])
