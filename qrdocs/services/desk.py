"""
Desk wiring: one instance of every service, built from settings.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from qrdocs.core.config import Settings
from qrdocs.core.roles import RoleHierarchy
from qrdocs.core.security import HashedCredentialStore
from qrdocs.models.session import Session
from qrdocs.services.auth import AuthController
from qrdocs.services.directory import UserDirectory
from qrdocs.services.ledger import ItemLedger
from qrdocs.services.lockout import LockoutPolicy


class SessionRegistry:
    """Sessions issued over HTTP; a token whose session is gone is rejected.

    Entries live as long as their token; expired ones are pruned on access.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._sessions: dict[str, tuple[Session, float]] = {}
        self._lock = threading.Lock()

    def _prune(self, now: float) -> None:
        for sid in [sid for sid, (_, exp) in self._sessions.items() if exp <= now]:
            del self._sessions[sid]

    def add(self, session: Session) -> None:
        now = self.clock()
        with self._lock:
            self._prune(now)
            self._sessions[session.session_id] = (session, now + self.ttl_seconds)

    def get(self, session_id: str) -> Session | None:
        now = self.clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            if entry[1] <= now:
                del self._sessions[session_id]
                return None
            return entry[0]

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


class Desk:
    def __init__(self, settings: Settings, clock: Callable[[], float] = time.time) -> None:
        self.settings = settings
        self.hierarchy = RoleHierarchy.from_settings(settings)
        self.verifier = HashedCredentialStore.from_hierarchy(self.hierarchy)
        self.lockout = LockoutPolicy(
            max_attempts=settings.MAX_FAILED_ATTEMPTS,
            lockout_seconds=settings.LOCKOUT_SECONDS,
            clock=clock,
        )
        self.directory = UserDirectory()
        self.ledger = ItemLedger()
        self.auth = AuthController(self.hierarchy, self.verifier, self.directory, self.lockout)
        self.sessions = SessionRegistry(settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60, clock=clock)
