from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.deps import conflict_http_error, entity_ref, get_registry, require_session, update_session
from services import fixed_slot_store
from services.session import SessionRegistry
from schemas.fixed_slot import AddFixedSlotRequest, FixedSlotOut, FixedSlotsByTeacherResponse, ListFixedSlotsResponse


router = APIRouter()


def _listing(store: fixed_slot_store.FixedSlotStore, class_id: str | None = None) -> ListFixedSlotsResponse:
    rows = fixed_slot_store.for_class(store, class_id) if class_id else fixed_slot_store.to_records(store)
    return ListFixedSlotsResponse(version=store.version, slots=[FixedSlotOut.model_validate(s) for s in rows])


@router.get("", response_model=ListFixedSlotsResponse)
def list_fixed_slots(
    session_id: str,
    class_id: str | None = Query(default=None),
    registry: SessionRegistry = Depends(get_registry),
) -> ListFixedSlotsResponse:
    session = require_session(registry, session_id)
    return _listing(session.fixed_slots, class_id)


@router.get("/by-teacher", response_model=FixedSlotsByTeacherResponse)
def fixed_slots_by_teacher(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> FixedSlotsByTeacherResponse:
    session = require_session(registry, session_id)
    grouped = fixed_slot_store.group_by_teacher(session.fixed_slots)
    return FixedSlotsByTeacherResponse(
        groups={tid: [FixedSlotOut.model_validate(s) for s in slots] for tid, slots in grouped.items()}
    )


@router.post("", response_model=ListFixedSlotsResponse, status_code=201)
def add_fixed_slot(
    session_id: str,
    payload: AddFixedSlotRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> ListFixedSlotsResponse:
    teacher = entity_ref("teacher", payload.teacher_id, payload.teacher_name)
    klass = entity_ref("class", payload.class_id, payload.class_name, payload.class_level)
    subject = entity_ref("subject", payload.subject_id, payload.subject_name)

    def _apply(session):
        result = fixed_slot_store.add(session.fixed_slots, teacher, klass, subject, payload.day, payload.period)
        return session.with_fixed_slots(result.store), result

    result = update_session(registry, session_id, _apply)
    if not result.ok:
        raise conflict_http_error(result.conflict)
    return _listing(result.store)


@router.delete("/{slot_id}", response_model=ListFixedSlotsResponse)
def remove_fixed_slot(
    session_id: str,
    slot_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> ListFixedSlotsResponse:
    def _apply(session):
        store = fixed_slot_store.remove(session.fixed_slots, slot_id)
        return session.with_fixed_slots(store), store

    return _listing(update_session(registry, session_id, _apply))
