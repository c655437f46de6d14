from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from models.fixed_slot import FixedSlot


StoreT = TypeVar("StoreT")


class ConflictKind(str, Enum):
    CLASS_SLOT_TAKEN = "CLASS_SLOT_TAKEN"
    TEACHER_SLOT_TAKEN = "TEACHER_SLOT_TAKEN"
    INVALID_PERIOD = "INVALID_PERIOD"


@dataclass(frozen=True)
class StoreConflict:
    kind: ConflictKind
    message: str
    existing: FixedSlot | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MutationResult(Generic[StoreT]):
    """Outcome of a store mutation.

    On rejection ``store`` is the unchanged input snapshot and ``conflict``
    says why.
    """

    store: StoreT
    conflict: StoreConflict | None = None

    @property
    def ok(self) -> bool:
        return self.conflict is None
