"""
Role hierarchy: role levels, entry points and credential lookup.

The hierarchy is the single source of truth for "at least as privileged
as" checks and for resolving which role a password opens.  Some entry
points open more than one role: the secrets of their candidate roles are
tried in order and the first match wins.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Mapping, Protocol

from qrdocs.core.errors import Forbidden

if TYPE_CHECKING:
    from qrdocs.models.session import Session


class Role(str, Enum):
    CLIENT = "client"
    CASHIER = "cashier"
    HEAD_CASHIER = "head-cashier"
    ADMIN = "admin"
    CREATOR = "creator"
    NIKITOVSKY = "nikitovsky"
    ROLE24 = "role24"

    @property
    def level(self) -> int:
        return _LEVELS[self]


_LEVELS: dict[Role, int] = {role: idx for idx, role in enumerate(Role)}

ROLE_NAMES: dict[Role, str] = {
    Role.CLIENT: "Клиент",
    Role.CASHIER: "Кассир",
    Role.HEAD_CASHIER: "Главный кассир",
    Role.ADMIN: "Администратор",
    Role.CREATOR: "Создатель",
    Role.NIKITOVSKY: "Никитовский",
    Role.ROLE24: "Роль 24",
}

# Entry point -> roles whose secrets are tried, in order.
ENTRY_POINTS: dict[Role, tuple[Role, ...]] = {
    Role.CLIENT: (),
    Role.CASHIER: (Role.CASHIER,),
    Role.HEAD_CASHIER: (Role.HEAD_CASHIER,),
    Role.ADMIN: (Role.ADMIN,),
    Role.CREATOR: (Role.CREATOR,),
    Role.NIKITOVSKY: (Role.NIKITOVSKY, Role.ROLE24),
}


class CredentialVerifier(Protocol):
    def verify(self, role: Role, candidate: str) -> bool: ...


def level_of(role: Role | str) -> int:
    return Role(role).level


class RoleHierarchy:
    """Immutable role table plus the secret configured for each staff role."""

    def __init__(self, secrets: Mapping[Role, str]) -> None:
        missing = [r.value for r in Role if r is not Role.CLIENT and not secrets.get(r)]
        if missing:
            raise ValueError(f"No secret configured for roles: {', '.join(missing)}")
        self._secrets = {Role(r): s for r, s in secrets.items() if Role(r) is not Role.CLIENT}

    @classmethod
    def from_settings(cls, settings) -> "RoleHierarchy":
        return cls(
            {
                Role.CASHIER: settings.CASHIER_SECRET,
                Role.HEAD_CASHIER: settings.HEAD_CASHIER_SECRET,
                Role.ADMIN: settings.ADMIN_SECRET,
                Role.CREATOR: settings.CREATOR_SECRET,
                Role.NIKITOVSKY: settings.NIKITOVSKY_SECRET,
                Role.ROLE24: settings.ROLE24_SECRET,
            }
        )

    level_of = staticmethod(level_of)

    def credential_for(self, role: Role | str) -> str | None:
        """Secret of a staff role, ``None`` for clients."""
        return self._secrets.get(Role(role))

    def is_entry_point(self, role: Role | str) -> bool:
        try:
            return Role(role) in ENTRY_POINTS
        except ValueError:
            return False

    def candidates(self, entry: Role | str) -> tuple[Role, ...]:
        return ENTRY_POINTS.get(Role(entry), ())

    def resolve(self, entry: Role | str, candidate: str, verifier: CredentialVerifier) -> Role | None:
        """Return the first role reachable from ``entry`` whose secret matches."""
        for role in self.candidates(entry):
            if verifier.verify(role, candidate):
                return role
        return None


def authorize(session: "Session", min_role: Role) -> None:
    """Raise ``Forbidden`` unless the session's role is at least ``min_role``."""
    if level_of(session.role) < min_role.level:
        raise Forbidden(required_level=min_role.level, required_role=min_role.value)
