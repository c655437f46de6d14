from __future__ import annotations

from fastapi import HTTPException, Request

from core.config import settings
from models.entities import EntityRef, EntityType
from models.results import ConflictKind, StoreConflict
from models.time_grid import Level
from services.session import SessionNotFound, SessionRegistry, WizardSession


def get_registry(request: Request) -> SessionRegistry:
    registry = getattr(request.app.state, "sessions", None)
    if registry is None:
        registry = SessionRegistry(max_sessions=settings.max_sessions)
        request.app.state.sessions = registry
    return registry


def require_session(registry: SessionRegistry, session_id: str) -> WizardSession:
    try:
        return registry.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="SESSION_NOT_FOUND")


def parse_level(raw: str | None) -> Level | None:
    if raw is None or not str(raw).strip():
        return None
    try:
        return Level.parse(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail="UNKNOWN_LEVEL")


def entity_ref(entity_type: str, entity_id: str, name: str = "", level: str | None = None) -> EntityRef:
    return EntityRef(
        entity_type=EntityType.parse(entity_type),
        entity_id=entity_id,
        name=name,
        level=parse_level(level),
    )


_STATUS_BY_CONFLICT = {
    ConflictKind.CLASS_SLOT_TAKEN: 409,
    ConflictKind.TEACHER_SLOT_TAKEN: 409,
    ConflictKind.INVALID_PERIOD: 400,
}


def conflict_http_error(conflict: StoreConflict) -> HTTPException:
    return HTTPException(
        status_code=_STATUS_BY_CONFLICT.get(conflict.kind, 400),
        detail={
            "code": conflict.kind.value,
            "message": conflict.message,
            "conflict": conflict.existing.to_dict() if conflict.existing is not None else None,
            "metadata": conflict.metadata,
        },
    )


def update_session(registry: SessionRegistry, session_id: str, fn):
    try:
        return registry.update(session_id, fn)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="SESSION_NOT_FOUND")
