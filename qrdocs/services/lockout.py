"""
Brute-force lockout for password logins.

Failed attempts are counted per lockout key.  With the default single
global key every password entry point shares one counter, like the
login screen of a single desk terminal.  Reaching the limit opens a
lockout window; a window is cleared the first time the clock is seen
past its end, either lazily on the next attempt or by the periodic
``sweep``.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from qrdocs.core.errors import InvalidCredential, LockedOut, TooManyAttempts

logger = logging.getLogger(__name__)

GLOBAL_KEY = "login-screen"


@dataclass
class LockoutState:
    failed_attempts: int = 0
    lockout_until: float | None = None

    def is_locked(self, now: float) -> bool:
        return self.lockout_until is not None and now < self.lockout_until

    def remaining_seconds(self, now: float) -> int:
        if self.lockout_until is None:
            return 0
        return max(0, math.ceil(self.lockout_until - now))


class LockoutPolicy:
    def __init__(
        self,
        max_attempts: int = 3,
        lockout_seconds: float = 90,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self.clock = clock
        self._states: dict[str, LockoutState] = {}
        self._lock = threading.Lock()

    def _now(self, now: float | None) -> float:
        return self.clock() if now is None else now

    def _expire(self, key: str, state: LockoutState, now: float) -> None:
        if state.lockout_until is not None and now >= state.lockout_until:
            state.failed_attempts = 0
            state.lockout_until = None
            logger.info("Login lockout expired for %s", key)

    def state(self, key: str = GLOBAL_KEY, now: float | None = None) -> LockoutState:
        """Snapshot of the state for ``key`` after expiring a passed window."""
        now = self._now(now)
        with self._lock:
            state = self._states.get(key)
            if state is None:
                return LockoutState()
            self._expire(key, state, now)
            return LockoutState(state.failed_attempts, state.lockout_until)

    def check(self, key: str = GLOBAL_KEY, now: float | None = None) -> None:
        """Raise ``LockedOut`` while a window is active for ``key``."""
        now = self._now(now)
        with self._lock:
            state = self._states.get(key)
            if state is None:
                return
            self._expire(key, state, now)
            if state.is_locked(now):
                raise LockedOut(state.remaining_seconds(now))

    def register_failure(self, key: str = GLOBAL_KEY, now: float | None = None) -> None:
        """Count one failed attempt and always raise the resulting error."""
        now = self._now(now)
        with self._lock:
            state = self._states.setdefault(key, LockoutState())
            self._expire(key, state, now)
            if state.is_locked(now):
                raise LockedOut(state.remaining_seconds(now))
            state.failed_attempts += 1
            if state.failed_attempts >= self.max_attempts:
                state.lockout_until = now + self.lockout_seconds
                logger.warning(
                    "Login locked for %ss after %d failed attempts (%s)",
                    self.lockout_seconds,
                    state.failed_attempts,
                    key,
                )
                raise TooManyAttempts(state.remaining_seconds(now))
            remaining = self.max_attempts - state.failed_attempts
            logger.info("Failed login attempt for %s, %d remaining", key, remaining)
            raise InvalidCredential(remaining)

    def register_success(self, key: str = GLOBAL_KEY, now: float | None = None) -> None:
        """Clear the counter, unless a window opened while the login was verified."""
        now = self._now(now)
        with self._lock:
            state = self._states.get(key)
            if state is None:
                return
            self._expire(key, state, now)
            if state.is_locked(now):
                raise LockedOut(state.remaining_seconds(now))
            del self._states[key]

    def sweep(self, now: float | None = None) -> int:
        """Expire every passed window; returns how many were cleared."""
        now = self._now(now)
        cleared = 0
        with self._lock:
            for key in list(self._states):
                state = self._states[key]
                if state.lockout_until is not None and now >= state.lockout_until:
                    self._expire(key, state, now)
                    cleared += 1
                if state.failed_attempts == 0 and state.lockout_until is None:
                    del self._states[key]
        return cleared
