"""
Role secret hashing (passlib) and JWT session tokens (python-jose).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from qrdocs.core.config import settings
from qrdocs.core.roles import Role, RoleHierarchy

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_ALGORITHM = settings.ALGORITHM
_SECRET = settings.SECRET_KEY


# ── Role secrets ────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


class HashedCredentialStore:
    """``CredentialVerifier`` backed by hashes of the configured role secrets."""

    def __init__(self, hashes: dict[Role, str]) -> None:
        self._hashes = dict(hashes)

    @classmethod
    def from_hierarchy(cls, hierarchy: RoleHierarchy) -> "HashedCredentialStore":
        hashes = {}
        for role in Role:
            secret = hierarchy.credential_for(role)
            if secret is not None:
                hashes[role] = get_password_hash(secret)
        return cls(hashes)

    def verify(self, role: Role, candidate: str) -> bool:
        hashed = self._hashes.get(role)
        if hashed is None or not candidate:
            return False
        return verify_password(candidate, hashed)


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {**claims, "exp": expire, "type": "access"},
        _SECRET,
        algorithm=_ALGORITHM,
    )


def decode_access_token(token: str) -> dict | None:
    """Return payload dict if *access* token is valid, else ``None``."""
    try:
        payload = jwt.decode(token, _SECRET, algorithms=[_ALGORITHM])
        if payload.get("type") != "access":
            return None
        return payload
    except JWTError:
        return None
