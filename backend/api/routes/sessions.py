from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_registry, require_session, update_session
from models.constraint import ConstraintKind
from models.entities import EntityType
from services import constraint_store
from services.session import SelectionCursor, SessionLimitReached, SessionRegistry, WizardSession
from schemas.session import CreateSessionResponse, CursorIn, CursorOut, SessionSummaryOut


router = APIRouter()


def _summary(session_id: str, session: WizardSession) -> SessionSummaryOut:
    cursor = session.cursor
    return SessionSummaryOut(
        session_id=session_id,
        constraints_version=session.constraints.version,
        constraints_total=len(session.constraints),
        constraints_by_kind=constraint_store.counts_by_kind(session.constraints),
        fixed_slots_version=session.fixed_slots.version,
        fixed_slots_total=len(session.fixed_slots),
        cursor=CursorOut(
            entity_type=cursor.entity_type.value if cursor.entity_type is not None else None,
            entity_id=cursor.entity_id,
            kind=cursor.kind.value,
        ),
    )


@router.post("", response_model=CreateSessionResponse, status_code=201)
def create_session(registry: SessionRegistry = Depends(get_registry)) -> CreateSessionResponse:
    try:
        session_id = registry.create()
    except SessionLimitReached:
        raise HTTPException(status_code=429, detail="TOO_MANY_SESSIONS")
    return CreateSessionResponse(session_id=session_id)


@router.get("/{session_id}", response_model=SessionSummaryOut)
def get_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> SessionSummaryOut:
    return _summary(session_id, require_session(registry, session_id))


@router.put("/{session_id}/cursor", response_model=SessionSummaryOut)
def put_cursor(
    session_id: str,
    payload: CursorIn,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionSummaryOut:
    cursor = SelectionCursor(
        entity_type=EntityType.parse(payload.entity_type) if payload.entity_type else None,
        entity_id=payload.entity_id,
        kind=ConstraintKind(payload.kind),
    )
    session = update_session(registry, session_id, lambda s: (s.with_cursor(cursor), s.with_cursor(cursor)))
    return _summary(session_id, session)


@router.delete("/{session_id}")
def delete_session(session_id: str, registry: SessionRegistry = Depends(get_registry)) -> dict:
    require_session(registry, session_id)
    registry.drop(session_id)
    return {"ok": True}
