"""
Login flow: turns role selection + credentials into a ``Session``.

Two ways to drive it:

- ``authenticate`` evaluates one login request and returns a Session.  It
  keeps no flow state, so a backend serving many clients calls it with a
  lockout key of its choosing.
- ``select_role`` / ``attempt_login`` / ``logout`` model a single desk
  terminal: one selected role, one active Session at a time.

Client logins go through the phone lookup and never touch the lockout
counter.  Every other entry point is password gated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from qrdocs.core.errors import (
    AccountBlocked,
    AccountNotFound,
    InvalidField,
    InvalidState,
    MissingField,
)
from qrdocs.core.roles import CredentialVerifier, Role, RoleHierarchy
from qrdocs.models.session import Session
from qrdocs.models.user import normalize_phone
from qrdocs.services.directory import UserDirectory
from qrdocs.services.lockout import GLOBAL_KEY, LockoutPolicy

logger = logging.getLogger(__name__)


@dataclass
class LoginFlow:
    selected_role: Role | None = None
    password: str = ""
    phone: str = ""


class AuthController:
    def __init__(
        self,
        hierarchy: RoleHierarchy,
        verifier: CredentialVerifier,
        directory: UserDirectory,
        lockout: LockoutPolicy,
        lockout_key: str = GLOBAL_KEY,
    ) -> None:
        self.hierarchy = hierarchy
        self.verifier = verifier
        self.directory = directory
        self.lockout = lockout
        self.lockout_key = lockout_key
        self.flow = LoginFlow()
        self.session: Session | None = None

    # ── Stateless evaluation ────────────────────────────────────────
    def _entry_point(self, role: Role | str | None) -> Role:
        if role is None or not self.hierarchy.is_entry_point(role):
            raise InvalidField("role", f"{role!r} is not a login entry point")
        return Role(role)

    def authenticate(
        self,
        role: Role | str | None,
        credential: str = "",
        phone: str = "",
        lockout_key: str | None = None,
    ) -> Session:
        key = lockout_key or self.lockout_key
        entry = self._entry_point(role)
        self.lockout.check(key)

        if entry is Role.CLIENT:
            return self._client_session(phone)

        matched = self.hierarchy.resolve(entry, credential or "", self.verifier)
        if matched is None:
            self.lockout.register_failure(key)  # raises
        self.lockout.register_success(key)
        logger.info("Staff login granted: %s", matched.value)
        return Session(role=matched, identity=matched.value)

    def _client_session(self, phone: str) -> Session:
        if not normalize_phone(phone):
            raise MissingField("phone")
        account = self.directory.find_by_phone(phone, Role.CLIENT)
        if account is None:
            raise AccountNotFound()
        if account.blocked:
            raise AccountBlocked()
        logger.info("Client login granted: %s", account.username)
        return Session(role=Role.CLIENT, identity=account.username, phone=account.phone)

    # ── Terminal model ──────────────────────────────────────────────
    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    def select_role(self, role: Role | str) -> None:
        if self.session is not None:
            raise InvalidState("Log out before selecting another role")
        self.flow.selected_role = self._entry_point(role)

    def attempt_login(
        self,
        selected_role: Role | str | None = None,
        credential: str = "",
        phone: str = "",
    ) -> Session:
        if self.session is not None:
            raise InvalidState("A session is already active")
        if selected_role is not None:
            self.select_role(selected_role)
        self.flow.password = credential or ""
        self.flow.phone = phone or ""
        try:
            self.session = self.authenticate(
                self.flow.selected_role, self.flow.password, self.flow.phone
            )
        finally:
            self.flow.password = ""
        return self.session

    def logout(self) -> None:
        if self.session is not None:
            logger.info("Logout: %s", self.session.identity)
        self.session = None
        self.flow = LoginFlow()

    def tick(self, now: float | None = None) -> None:
        """Periodic lockout expiry check."""
        self.lockout.sweep(now)
