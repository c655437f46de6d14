from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.deps import conflict_http_error, entity_ref, get_registry, require_session, update_session
from models.constraint import ConstraintKind, TimeConstraint
from services import constraint_store
from services.reconciliation import partition
from services.session import SessionRegistry
from schemas.constraint import (
    BulkSetConstraintsRequest,
    ListConstraintsResponse,
    PurgeConstraintsRequest,
    QueryConstraintResponse,
    ReconciliationResponse,
    ResetConstraintsRequest,
    RosterIn,
    TimeConstraintOut,
    ToggleConstraintRequest,
)


router = APIRouter()


def _out(c: TimeConstraint) -> TimeConstraintOut:
    return TimeConstraintOut(**c.to_dict())


def _listing(store: constraint_store.ConstraintStore, entity_id: str | None = None) -> ListConstraintsResponse:
    rows = constraint_store.for_entity(store, entity_id) if entity_id else constraint_store.to_records(store)
    return ListConstraintsResponse(version=store.version, constraints=[_out(c) for c in rows])


@router.get("", response_model=ListConstraintsResponse)
def list_constraints(
    session_id: str,
    entity_id: str | None = Query(default=None),
    registry: SessionRegistry = Depends(get_registry),
) -> ListConstraintsResponse:
    session = require_session(registry, session_id)
    return _listing(session.constraints, entity_id)


@router.get("/query", response_model=QueryConstraintResponse)
def query_constraint(
    session_id: str,
    entity_type: str,
    entity_id: str,
    day: str,
    period: str,
    registry: SessionRegistry = Depends(get_registry),
) -> QueryConstraintResponse:
    session = require_session(registry, session_id)
    found = constraint_store.query(session.constraints, entity_type, entity_id, day, period)
    return QueryConstraintResponse(constraint=_out(found) if found is not None else None)


@router.post("/toggle", response_model=ListConstraintsResponse)
def toggle_constraint(
    session_id: str,
    payload: ToggleConstraintRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ListConstraintsResponse:
    entity = entity_ref(payload.entity.entity_type, payload.entity.entity_id, payload.entity.name, payload.entity.level)

    def _apply(session):
        kind = ConstraintKind(payload.kind) if payload.kind else session.cursor.kind
        result = constraint_store.toggle(session.constraints, entity, payload.day, payload.period, kind, payload.reason)
        return session.with_constraints(result.store), result

    result = update_session(registry, session_id, _apply)
    if not result.ok:
        raise conflict_http_error(result.conflict)
    return _listing(result.store, entity.entity_id)


@router.post("/bulk-set", response_model=ListConstraintsResponse)
def bulk_set_constraints(
    session_id: str,
    payload: BulkSetConstraintsRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ListConstraintsResponse:
    entity = entity_ref(payload.entity.entity_type, payload.entity.entity_id, payload.entity.name, payload.entity.level)

    def _apply(session):
        store = constraint_store.bulk_set(session.constraints, entity, payload.kind)
        return session.with_constraints(store), store

    store = update_session(registry, session_id, _apply)
    return _listing(store, entity.entity_id)


@router.post("/reset", response_model=ListConstraintsResponse)
def reset_constraints(
    session_id: str,
    payload: ResetConstraintsRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ListConstraintsResponse:
    def _apply(session):
        store = constraint_store.reset(session.constraints, payload.entity_id)
        return session.with_constraints(store), store

    store = update_session(registry, session_id, _apply)
    return _listing(store, payload.entity_id)


@router.post("/reconcile", response_model=ReconciliationResponse)
def reconcile_constraints(
    session_id: str,
    payload: RosterIn,
    registry: SessionRegistry = Depends(get_registry),
) -> ReconciliationResponse:
    session = require_session(registry, session_id)
    valid_ids = set(payload.teacher_ids) | set(payload.class_ids) | set(payload.subject_ids)
    report = partition(constraint_store.to_records(session.constraints), valid_ids)
    return ReconciliationResponse(
        active_count=report.active_count,
        orphan_count=report.orphan_count,
        orphaned_entity_ids=report.orphaned_entity_ids,
        orphaned=[_out(c) for c in report.orphaned],
    )


@router.post("/purge", response_model=ListConstraintsResponse)
def purge_constraints(
    session_id: str,
    payload: PurgeConstraintsRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ListConstraintsResponse:
    def _apply(session):
        store = constraint_store.remove_many(session.constraints, payload.constraint_ids)
        return session.with_constraints(store), store

    store = update_session(registry, session_id, _apply)
    return _listing(store)
