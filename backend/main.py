from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from api.router import api_router
from core.config import settings
from core.logging import setup_logging
from services.session import SessionLimitReached, SessionNotFound, SessionRegistry


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging(environment=settings.environment, level=settings.log_level, log_dir=settings.log_dir)
    is_production = settings.environment.lower() == "production"
    app = FastAPI(
        title="Timetable Wizard Constraints API",
        version="0.1.0",
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.state.sessions = SessionRegistry(max_sessions=settings.max_sessions)

    @app.exception_handler(SessionNotFound)
    def _session_not_found(_request, _exc: SessionNotFound):
        return JSONResponse(status_code=404, content={"detail": "SESSION_NOT_FOUND"})

    @app.exception_handler(SessionLimitReached)
    def _session_limit(_request, exc: SessionLimitReached):
        logger.warning("Session limit reached (429)", exc_info=exc)
        return JSONResponse(status_code=429, content={"detail": "TOO_MANY_SESSIONS"})

    allow_origins = [settings.frontend_origin]
    allow_origin_regex = None
    if not is_production:
        # Dev-friendly: allow the configured origin and any localhost port.
        allow_origins.extend(["http://localhost:5173", "http://127.0.0.1:5173"])
        allow_origin_regex = r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_origin_regex=allow_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health() -> dict:
        return {"app": "ok", "sessions": len(app.state.sessions)}

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
