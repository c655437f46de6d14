"""Wizard session state.

A session bundles both stores and the selection cursor into one value.
``SessionRegistry`` keeps sessions for the API process and serializes
mutations per session with a dedicated lock.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field, replace
from typing import Callable, TypeVar

from models.constraint import ConstraintKind
from models.entities import EntityType
from services.constraint_store import ConstraintStore
from services.fixed_slot_store import FixedSlotStore


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SelectionCursor:
    entity_type: EntityType | None = None
    entity_id: str | None = None
    kind: ConstraintKind = ConstraintKind.UNAVAILABLE


@dataclass(frozen=True)
class WizardSession:
    constraints: ConstraintStore = field(default_factory=ConstraintStore)
    fixed_slots: FixedSlotStore = field(default_factory=FixedSlotStore)
    cursor: SelectionCursor = field(default_factory=SelectionCursor)

    def with_constraints(self, store: ConstraintStore) -> "WizardSession":
        return replace(self, constraints=store)

    def with_fixed_slots(self, store: FixedSlotStore) -> "WizardSession":
        return replace(self, fixed_slots=store)

    def with_cursor(self, cursor: SelectionCursor) -> "WizardSession":
        return replace(self, cursor=cursor)


class SessionNotFound(KeyError):
    pass


class SessionLimitReached(RuntimeError):
    pass


class SessionRegistry:
    """Sessions by id. Lock order is session lock, then registry lock."""

    def __init__(self, *, max_sessions: int) -> None:
        self._max_sessions = int(max_sessions)
        self._sessions: dict[str, WizardSession] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, session: WizardSession | None = None) -> str:
        with self._registry_lock:
            if len(self._sessions) >= self._max_sessions:
                raise SessionLimitReached(f"At most {self._max_sessions} sessions may be open")
            session_id = uuid.uuid4().hex
            self._sessions[session_id] = session or WizardSession()
            self._locks[session_id] = threading.RLock()
        logger.debug("Session %s created (%d open)", session_id, len(self._sessions))
        return session_id

    def get(self, session_id: str) -> WizardSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFound(session_id) from None

    def update(self, session_id: str, fn: Callable[[WizardSession], tuple[WizardSession, T]]) -> T:
        """Apply ``fn`` to the current session under the session's lock.

        ``fn`` returns ``(new_session, result)``; ``new_session`` becomes the
        stored state and ``result`` is handed back to the caller. A session
        dropped while ``fn`` runs stays dropped.
        """

        lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFound(session_id)
        with lock:
            current = self.get(session_id)
            new_session, result = fn(current)
            with self._registry_lock:
                if session_id in self._sessions:
                    self._sessions[session_id] = new_session
                else:
                    logger.debug("Session %s dropped during update; result discarded", session_id)
        return result

    def drop(self, session_id: str) -> None:
        lock = self._locks.get(session_id)
        if lock is None:
            return
        with lock:
            with self._registry_lock:
                self._sessions.pop(session_id, None)
                self._locks.pop(session_id, None)
        logger.debug("Session %s dropped", session_id)
