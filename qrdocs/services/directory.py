"""
User directory: phone number -> account, with block / unblock.

Managing accounts needs the ``nikitovsky`` level.  Below ``role24`` a
manager may only hand out the client role, and only ``role24`` may block
a ``nikitovsky`` account.
"""

from __future__ import annotations

import logging
import threading

from qrdocs.core.errors import DuplicatePhone, Forbidden, InvalidField, MissingField, NotFound
from qrdocs.core.roles import Role, authorize
from qrdocs.models.session import Session
from qrdocs.models.user import UserAccount, normalize_phone

logger = logging.getLogger(__name__)

MANAGE_ROLE = Role.NIKITOVSKY
TOP_ROLE = Role.ROLE24


class UserDirectory:
    def __init__(self) -> None:
        self._accounts: dict[str, UserAccount] = {}
        self._lock = threading.Lock()

    def create_user(
        self,
        session: Session,
        username: str,
        phone: str,
        role: Role | str = Role.CLIENT,
    ) -> UserAccount:
        authorize(session, MANAGE_ROLE)
        username = (username or "").strip()
        phone = normalize_phone(phone)
        if not username:
            raise MissingField("username")
        if not phone:
            raise MissingField("phone")
        try:
            role = Role(role)
        except ValueError:
            raise InvalidField("role", f"unknown role {role!r}") from None
        if role is not Role.CLIENT and session.role is not TOP_ROLE:
            raise Forbidden(required_level=TOP_ROLE.level, required_role=TOP_ROLE.value)

        with self._lock:
            if phone in self._accounts:
                raise DuplicatePhone(phone)
            account = UserAccount(username=username, phone=phone, role=role)
            self._accounts[phone] = account
        logger.info("Account %s created with role %s by %s", username, role.value, session.identity)
        return account

    def toggle_block(self, session: Session, phone: str) -> UserAccount:
        authorize(session, MANAGE_ROLE)
        phone = normalize_phone(phone)
        with self._lock:
            account = self._accounts.get(phone)
            if account is None:
                raise NotFound(phone)
            if account.role is Role.NIKITOVSKY and session.role is not TOP_ROLE:
                raise Forbidden(required_level=TOP_ROLE.level, required_role=TOP_ROLE.value)
            account.blocked = not account.blocked
        logger.info(
            "Account %s %s by %s",
            account.username,
            "blocked" if account.blocked else "unblocked",
            session.identity,
        )
        return account

    def find_by_phone(self, phone: str, role: Role = Role.CLIENT) -> UserAccount | None:
        """Account registered under ``phone`` with exactly ``role``."""
        account = self._accounts.get(normalize_phone(phone))
        if account is None or account.role is not role:
            return None
        return account

    def list_users(self, session: Session) -> list[UserAccount]:
        authorize(session, MANAGE_ROLE)
        with self._lock:
            return list(self._accounts.values())
