from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from models.time_grid import DEFAULT_LEVEL, Level


class EntityType(str, Enum):
    TEACHER = "teacher"
    CLASS = "class"
    SUBJECT = "subject"

    @classmethod
    def parse(cls, raw: "str | EntityType") -> "EntityType":
        if isinstance(raw, EntityType):
            return raw
        t = str(raw or "").strip().lower()
        if t == "classes":
            t = "class"
        elif t in {"teachers", "subjects"}:
            t = t[:-1]
        return cls(t)


@dataclass(frozen=True)
class EntityRef:
    """Reference to a roster entity, tagged with its type and school level.

    The roster owns the entity itself; the wizard only keeps this handle.
    ``level`` is resolved once, when the reference is created.
    """

    entity_type: EntityType
    entity_id: str
    name: str = ""
    level: Level | None = None

    @property
    def effective_level(self) -> Level:
        return self.level or DEFAULT_LEVEL

    @classmethod
    def from_roster(cls, entity_type: EntityType | str, record: Mapping[str, Any]) -> "EntityRef":
        levels = record.get("levels") or []
        raw_level = levels[0] if levels else record.get("level")
        level: Level | None = None
        if raw_level:
            try:
                level = Level.parse(raw_level)
            except ValueError:
                level = None
        return cls(
            entity_type=EntityType.parse(entity_type),
            entity_id=str(record["id"]),
            name=str(record.get("name") or ""),
            level=level,
        )


def teacher_ref(entity_id: str, name: str = "", level: Level | str | None = None) -> EntityRef:
    return EntityRef(EntityType.TEACHER, entity_id, name, Level.parse(level) if level else None)


def class_ref(entity_id: str, name: str = "", level: Level | str | None = None) -> EntityRef:
    return EntityRef(EntityType.CLASS, entity_id, name, Level.parse(level) if level else None)


def subject_ref(entity_id: str, name: str = "", level: Level | str | None = None) -> EntityRef:
    return EntityRef(EntityType.SUBJECT, entity_id, name, Level.parse(level) if level else None)
