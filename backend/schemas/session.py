from __future__ import annotations

from pydantic import BaseModel

from schemas.constraint import ConstraintKindName, EntityTypeName


class CreateSessionResponse(BaseModel):
    session_id: str


class CursorIn(BaseModel):
    entity_type: EntityTypeName | None = None
    entity_id: str | None = None
    kind: ConstraintKindName = "unavailable"


class CursorOut(CursorIn):
    pass


class SessionSummaryOut(BaseModel):
    session_id: str
    constraints_version: int
    constraints_total: int
    constraints_by_kind: dict[str, int]
    fixed_slots_version: int
    fixed_slots_total: int
    cursor: CursorOut
