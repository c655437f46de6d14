from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from core.ids import normalize_id
from models.constraint import TimeConstraint


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationReport:
    active: list[TimeConstraint]
    orphaned: list[TimeConstraint]

    @property
    def active_count(self) -> int:
        return len(self.active)

    @property
    def orphan_count(self) -> int:
        return len(self.orphaned)

    @property
    def orphaned_entity_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for c in self.orphaned:
            seen.setdefault(c.entity_id, None)
        return list(seen)


def valid_ids_from_roster(
    teachers: Iterable[Mapping[str, Any]] = (),
    classes: Iterable[Mapping[str, Any]] = (),
    subjects: Iterable[Mapping[str, Any]] = (),
) -> set[str]:
    ids: set[str] = set()
    for group in (teachers, classes, subjects):
        for record in group:
            rid = record.get("id")
            if rid:
                ids.add(str(rid))
    return ids


def partition(constraints: Iterable[TimeConstraint], valid_ids: set[str]) -> ReconciliationReport:
    """Split constraints into those whose entity is still on the roster and the rest.

    Stored ids go through ``normalize_id`` with their entity type, so they
    always carry the canonical prefix (``teach-``, ``cls-``, ``sub-``). ``valid_ids``
    is matched as given: roster ids are expected to be canonical already, and
    an unprefixed roster id such as ``t1`` never matches, so constraints on it
    are reported as orphaned.

    Read-only: purging orphans is left to the caller.
    """

    active: list[TimeConstraint] = []
    orphaned: list[TimeConstraint] = []
    for c in constraints:
        if normalize_id(c.entity_id, c.entity_type.value) in valid_ids:
            active.append(c)
        else:
            orphaned.append(c)

    if orphaned:
        logger.info("Reconciliation: %d active, %d orphaned constraints", len(active), len(orphaned))
    return ReconciliationReport(active=active, orphaned=orphaned)
