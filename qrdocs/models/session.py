"""Authenticated session: the role and identity attached to every call."""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field

from qrdocs.core.roles import Role


@dataclass(frozen=True)
class Session:
    role: Role
    identity: str  # client username or staff role tag
    phone: str | None = None  # set for client sessions only
    session_id: str = field(default_factory=lambda: secrets.token_urlsafe(16))

    @property
    def is_client(self) -> bool:
        return self.role is Role.CLIENT

    def to_claims(self) -> dict[str, str | None]:
        return {
            "sub": self.identity,
            "role": self.role.value,
            "phone": self.phone,
            "sid": self.session_id,
        }

    @classmethod
    def from_claims(cls, payload: dict) -> "Session":
        return cls(
            role=Role(payload["role"]),
            identity=payload["sub"],
            phone=payload.get("phone"),
            session_id=payload["sid"],
        )
