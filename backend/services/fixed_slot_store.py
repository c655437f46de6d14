"""Pinned lessons.

Two uniqueness rules hold for every snapshot produced by ``add``:
one lesson per (class, day, period) and one lesson per (teacher, day, period).
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from models.entities import EntityRef
from models.fixed_slot import FixedSlot
from models.results import ConflictKind, MutationResult, StoreConflict
from models.time_grid import DAYS, is_assignable, is_known_period_label


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedSlotStore:
    slots: tuple[FixedSlot, ...] = ()
    version: int = 0

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self):
        return iter(self.slots)

    def _next(self, slots: tuple[FixedSlot, ...]) -> "FixedSlotStore":
        return FixedSlotStore(slots=slots, version=self.version + 1)


def empty() -> FixedSlotStore:
    return FixedSlotStore()


def from_records(records: Iterable[FixedSlot]) -> FixedSlotStore:
    """Load a serialized collection as-is. Use ``find_violations`` to audit it."""
    return FixedSlotStore(slots=tuple(records))


def to_records(store: FixedSlotStore) -> list[FixedSlot]:
    return list(store.slots)


def _invalid_period(day: str, period: str, level_name: str | None) -> StoreConflict:
    where = f" for {level_name}" if level_name else ""
    return StoreConflict(
        kind=ConflictKind.INVALID_PERIOD,
        message=f"{day} {period} is not an assignable period{where}",
        metadata={"day": day, "period": period, "level": level_name},
    )


def add(
    store: FixedSlotStore,
    teacher: EntityRef,
    klass: EntityRef,
    subject: EntityRef,
    day: str,
    period: str,
    *,
    now: datetime | None = None,
) -> MutationResult[FixedSlotStore]:
    if klass.level is not None:
        if not is_assignable(klass.level, day, period):
            return MutationResult(store=store, conflict=_invalid_period(day, period, klass.level.value))
    elif day not in DAYS or not is_known_period_label(period):
        return MutationResult(store=store, conflict=_invalid_period(day, period, None))

    # Class conflict is reported first when both would fire.
    for slot in store.slots:
        if slot.class_id == klass.entity_id and slot.day == day and slot.period == period:
            logger.info("Fixed slot rejected: class %s already has %s at %s %s", klass.entity_id, slot.id, day, period)
            return MutationResult(
                store=store,
                conflict=StoreConflict(
                    kind=ConflictKind.CLASS_SLOT_TAKEN,
                    message=f"Class {slot.class_name or slot.class_id} already has a fixed lesson on {day} period {period}",
                    existing=slot,
                ),
            )

    for slot in store.slots:
        if slot.teacher_id == teacher.entity_id and slot.day == day and slot.period == period:
            logger.info("Fixed slot rejected: teacher %s already has %s at %s %s", teacher.entity_id, slot.id, day, period)
            return MutationResult(
                store=store,
                conflict=StoreConflict(
                    kind=ConflictKind.TEACHER_SLOT_TAKEN,
                    message=f"Teacher {slot.teacher_name or slot.teacher_id} already teaches {slot.class_name or slot.class_id} on {day} period {period}",
                    existing=slot,
                ),
            )

    new_slot = FixedSlot(
        id=f"fixed-{uuid.uuid4().hex}",
        teacher_id=teacher.entity_id,
        teacher_name=teacher.name,
        class_id=klass.entity_id,
        class_name=klass.name,
        subject_id=subject.entity_id,
        subject_name=subject.name,
        day=day,
        period=period,
        created_at=now if now is not None else datetime.now(timezone.utc),
    )
    return MutationResult(store=store._next(store.slots + (new_slot,)))


def remove(store: FixedSlotStore, slot_id: str) -> FixedSlotStore:
    remaining = tuple(s for s in store.slots if s.id != slot_id)
    if len(remaining) == len(store.slots):
        return store
    return store._next(remaining)


def group_by_teacher(store: FixedSlotStore) -> dict[str, list[FixedSlot]]:
    grouped: dict[str, list[FixedSlot]] = defaultdict(list)
    for slot in store.slots:
        grouped[slot.teacher_id].append(slot)
    return dict(grouped)


def for_class(store: FixedSlotStore, class_id: str) -> list[FixedSlot]:
    return [s for s in store.slots if s.class_id == class_id]


def find_violations(store: FixedSlotStore) -> list[StoreConflict]:
    """Re-check both uniqueness rules over a loaded collection.

    Each later slot colliding with an earlier one yields one conflict.
    """

    conflicts: list[StoreConflict] = []
    by_class: dict[tuple[str, str, str], FixedSlot] = {}
    by_teacher: dict[tuple[str, str, str], FixedSlot] = {}
    for slot in store.slots:
        class_key = (slot.class_id, slot.day, slot.period)
        teacher_key = (slot.teacher_id, slot.day, slot.period)
        if class_key in by_class:
            conflicts.append(
                StoreConflict(
                    kind=ConflictKind.CLASS_SLOT_TAKEN,
                    message=f"Class {slot.class_id} has more than one fixed lesson on {slot.day} period {slot.period}",
                    existing=by_class[class_key],
                    metadata={"slot_id": slot.id},
                )
            )
        else:
            by_class[class_key] = slot
        if teacher_key in by_teacher:
            conflicts.append(
                StoreConflict(
                    kind=ConflictKind.TEACHER_SLOT_TAKEN,
                    message=f"Teacher {slot.teacher_id} has more than one fixed lesson on {slot.day} period {slot.period}",
                    existing=by_teacher[teacher_key],
                    metadata={"slot_id": slot.id},
                )
            )
        else:
            by_teacher[teacher_key] = slot
    if conflicts:
        logger.info("Fixed slot collection has %d uniqueness violations", len(conflicts))
    return conflicts
