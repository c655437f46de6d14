"""Time-availability rules per (entity, day, period).

``ConstraintStore`` is an immutable snapshot. Every mutation returns a new
snapshot with a bumped ``version``; the caller replaces its reference with
the returned one. At most one record exists per natural key
``(entity_type, entity_id, day, period)``.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable

from models.constraint import BASELINE_KIND, ConstraintKey, ConstraintKind, TimeConstraint
from models.entities import EntityRef, EntityType
from models.results import ConflictKind, MutationResult, StoreConflict
from models.time_grid import DAYS, is_assignable, lesson_periods


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConstraintStore:
    records: dict[ConstraintKey, TimeConstraint] = field(default_factory=dict)
    version: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records.values())

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def _next(self, records: dict[ConstraintKey, TimeConstraint]) -> "ConstraintStore":
        return ConstraintStore(records=records, version=self.version + 1)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


def empty() -> ConstraintStore:
    return ConstraintStore()


def from_records(records: Iterable[TimeConstraint]) -> ConstraintStore:
    """Build a store from a serialized collection; the last record wins per key."""
    by_key: dict[ConstraintKey, TimeConstraint] = {}
    for r in records:
        if r.key in by_key:
            logger.debug("Duplicate constraint key %s dropped (id=%s)", r.key, by_key[r.key].id)
            del by_key[r.key]
        by_key[r.key] = r
    return ConstraintStore(records=by_key)


def to_records(store: ConstraintStore) -> list[TimeConstraint]:
    return list(store.records.values())


def query(
    store: ConstraintStore,
    entity_type: EntityType | str,
    entity_id: str,
    day: str,
    period: str,
) -> TimeConstraint | None:
    return store.records.get((EntityType.parse(entity_type), entity_id, day, period))


def for_entity(store: ConstraintStore, entity_id: str) -> list[TimeConstraint]:
    return [r for r in store.records.values() if r.entity_id == entity_id]


def counts_by_kind(store: ConstraintStore) -> dict[str, int]:
    counts = Counter(r.constraint_type.value for r in store.records.values())
    return {kind.value: int(counts.get(kind.value, 0)) for kind in ConstraintKind}


def toggle(
    store: ConstraintStore,
    entity: EntityRef,
    day: str,
    period: str,
    kind: ConstraintKind | str,
    reason: str | None = None,
    *,
    now: datetime | None = None,
) -> MutationResult[ConstraintStore]:
    """Cycle one grid cell: absent -> ``kind`` -> other kind -> absent.

    Same kind on an existing record removes it; a different kind replaces
    kind and reason in place.
    """

    kind = ConstraintKind(kind)
    level = entity.effective_level
    if not is_assignable(level, day, period):
        logger.debug("Toggle rejected: %s %s is not a lesson period for %s", day, period, level.value)
        return MutationResult(
            store=store,
            conflict=StoreConflict(
                kind=ConflictKind.INVALID_PERIOD,
                message=f"{day} {period} is not an assignable period for {level.value}",
                metadata={"day": day, "period": period, "level": level.value},
            ),
        )

    ts = _now(now)
    key: ConstraintKey = (entity.entity_type, entity.entity_id, day, period)
    text = reason if reason is not None else f"{kind.label} - {entity.name or entity.entity_id}"
    records = dict(store.records)
    existing = records.get(key)

    if existing is not None and existing.constraint_type == kind:
        del records[key]
    elif existing is not None:
        records[key] = replace(existing, constraint_type=kind, reason=text, updated_at=ts)
    else:
        records[key] = TimeConstraint(
            id=_new_id(),
            entity_type=entity.entity_type,
            entity_id=entity.entity_id,
            day=day,
            period=period,
            constraint_type=kind,
            reason=text,
            created_at=ts,
            updated_at=ts,
        )
    return MutationResult(store=store._next(records))


def bulk_set(
    store: ConstraintStore,
    entity: EntityRef,
    kind: ConstraintKind | str,
    *,
    now: datetime | None = None,
) -> ConstraintStore:
    kind = ConstraintKind(kind)
    records = {k: r for k, r in store.records.items() if r.entity_id != entity.entity_id}
    removed = len(store.records) - len(records)

    if kind != BASELINE_KIND:
        ts = _now(now)
        reason = f"Bulk assignment: {kind.label}"
        for tp in lesson_periods(entity.effective_level):
            for day in DAYS:
                c = TimeConstraint(
                    id=_new_id(),
                    entity_type=entity.entity_type,
                    entity_id=entity.entity_id,
                    day=day,
                    period=tp.period,
                    constraint_type=kind,
                    reason=reason,
                    created_at=ts,
                    updated_at=ts,
                )
                records[c.key] = c

    logger.debug(
        "Bulk set %s %s -> %s (removed=%d, total=%d)",
        entity.entity_type.value,
        entity.entity_id,
        kind.value,
        removed,
        len(records),
    )
    return store._next(records)


def reset(store: ConstraintStore, entity_id: str) -> ConstraintStore:
    records = {k: r for k, r in store.records.items() if r.entity_id != entity_id}
    if len(records) == len(store.records):
        return store
    return store._next(records)


def remove_many(store: ConstraintStore, constraint_ids: Iterable[str]) -> ConstraintStore:
    """Drop records by id, e.g. orphans the caller chose to purge."""
    ids = set(constraint_ids)
    records = {k: r for k, r in store.records.items() if r.id not in ids}
    if len(records) == len(store.records):
        return store
    return store._next(records)
