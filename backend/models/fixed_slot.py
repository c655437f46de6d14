from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FixedSlot:
    """A pinned lesson.

    Names are copied from the roster when the slot is created and are not
    refreshed on rename.
    """

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

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "teacher_id": self.teacher_id,
            "teacher_name": self.teacher_name,
            "class_id": self.class_id,
            "class_name": self.class_name,
            "subject_id": self.subject_id,
            "subject_name": self.subject_name,
            "day": self.day,
            "period": self.period,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "FixedSlot":
        created = d["created_at"]
        return cls(
            id=str(d["id"]),
            teacher_id=str(d["teacher_id"]),
            teacher_name=str(d.get("teacher_name") or ""),
            class_id=str(d["class_id"]),
            class_name=str(d.get("class_name") or ""),
            subject_id=str(d["subject_id"]),
            subject_name=str(d.get("subject_name") or ""),
            day=str(d["day"]),
            period=str(d["period"]),
            created_at=created if isinstance(created, datetime) else datetime.fromisoformat(created),
        )
