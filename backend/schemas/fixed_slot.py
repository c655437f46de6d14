from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class FixedSlotOut(BaseModel):
    id: str
    teacher_id: str
    teacher_name: str
    class_id: str
    class_name: str
    subject_id: str
    subject_name: str
    day: str
    period: str
    created_at: datetime

    class Config:
        from_attributes = True


class ListFixedSlotsResponse(BaseModel):
    version: int
    slots: list[FixedSlotOut] = Field(default_factory=list)


class FixedSlotsByTeacherResponse(BaseModel):
    groups: dict[str, list[FixedSlotOut]] = Field(default_factory=dict)


class AddFixedSlotRequest(BaseModel):
    teacher_id: str = Field(min_length=1)
    teacher_name: str = ""
    class_id: str = Field(min_length=1)
    class_name: str = ""
    class_level: str | None = None
    subject_id: str = Field(min_length=1)
    subject_name: str = ""
    day: str = Field(min_length=1)
    period: str = Field(min_length=1)
