"""
Client / staff account record held by the user directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from qrdocs.core.roles import Role


@dataclass
class UserAccount:
    username: str
    phone: str  # natural key
    role: Role = Role.CLIENT
    blocked: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def normalize_phone(phone: str | None) -> str:
    """Phone as stored and compared: all whitespace removed."""
    return "".join((phone or "").split())
