from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


EntityTypeName = Literal["teacher", "class", "subject"]
ConstraintKindName = Literal["unavailable", "preferred", "restricted"]


class EntityRefIn(BaseModel):
    entity_type: EntityTypeName
    entity_id: str = Field(min_length=1)
    name: str = ""
    level: str | None = None


class TimeConstraintOut(BaseModel):
    id: str
    entity_type: EntityTypeName
    entity_id: str
    day: str
    period: str
    constraint_type: ConstraintKindName
    reason: str
    created_at: datetime
    updated_at: datetime


class ListConstraintsResponse(BaseModel):
    version: int
    constraints: list[TimeConstraintOut] = Field(default_factory=list)


class ToggleConstraintRequest(BaseModel):
    entity: EntityRefIn
    day: str = Field(min_length=1)
    period: str = Field(min_length=1)
    # Falls back to the session cursor's kind.
    kind: ConstraintKindName | None = None
    reason: str | None = None


class BulkSetConstraintsRequest(BaseModel):
    entity: EntityRefIn
    kind: ConstraintKindName


class ResetConstraintsRequest(BaseModel):
    entity_id: str = Field(min_length=1)


class QueryConstraintResponse(BaseModel):
    constraint: TimeConstraintOut | None = None


class RosterIn(BaseModel):
    teacher_ids: list[str] = Field(default_factory=list)
    class_ids: list[str] = Field(default_factory=list)
    subject_ids: list[str] = Field(default_factory=list)


class ReconciliationResponse(BaseModel):
    active_count: int
    orphan_count: int
    orphaned_entity_ids: list[str] = Field(default_factory=list)
    orphaned: list[TimeConstraintOut] = Field(default_factory=list)


class PurgeConstraintsRequest(BaseModel):
    constraint_ids: list[str] = Field(default_factory=list)
