from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from models.entities import EntityType


class ConstraintKind(str, Enum):
    UNAVAILABLE = "unavailable"
    PREFERRED = "preferred"
    RESTRICTED = "restricted"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS = {
    ConstraintKind.UNAVAILABLE: "Unavailable",
    ConstraintKind.PREFERRED: "Preferred",
    ConstraintKind.RESTRICTED: "Restricted",
}

# An unmarked cell renders as this kind; bulk-setting to it clears the entity.
BASELINE_KIND = ConstraintKind.PREFERRED


ConstraintKey = tuple[EntityType, str, str, str]


@dataclass(frozen=True)
class TimeConstraint:
    id: str
    entity_type: EntityType
    entity_id: str
    day: str
    period: str
    constraint_type: ConstraintKind
    reason: str
    created_at: datetime
    updated_at: datetime

    @property
    def key(self) -> ConstraintKey:
        return (self.entity_type, self.entity_id, self.day, self.period)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "entity_type": self.entity_type.value,
            "entity_id": self.entity_id,
            "day": self.day,
            "period": self.period,
            "constraint_type": self.constraint_type.value,
            "reason": self.reason,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "TimeConstraint":
        created = d.get("created_at")
        updated = d.get("updated_at") or created
        return cls(
            id=str(d["id"]),
            entity_type=EntityType.parse(d["entity_type"]),
            entity_id=str(d["entity_id"]),
            day=str(d["day"]),
            period=str(d["period"]),
            constraint_type=ConstraintKind(d["constraint_type"]),
            reason=str(d.get("reason") or ""),
            created_at=created if isinstance(created, datetime) else datetime.fromisoformat(created),
            updated_at=updated if isinstance(updated, datetime) else datetime.fromisoformat(updated),
        )
