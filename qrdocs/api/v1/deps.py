"""
FastAPI dependencies: desk services, session guard and lockout key.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from qrdocs.core.security import decode_access_token
from qrdocs.models.session import Session
from qrdocs.services.desk import Desk
from qrdocs.services.lockout import GLOBAL_KEY

# We use auto_error=False so we can manually check for the cookie if header is missing
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_desk(request: Request) -> Desk:
    return request.app.state.desk


def get_lockout_key(request: Request, desk: Desk = Depends(get_desk)) -> str:
    """Global login-screen key, or one key per client address."""
    if desk.settings.LOCKOUT_SCOPE == "client" and request.client is not None:
        return f"ip:{request.client.host}"
    return GLOBAL_KEY


# ── Auth dependencies ───────────────────────────────────────────────
async def get_current_session(
    token: Optional[str] = Depends(oauth2_scheme),
    access_token: Optional[str] = Cookie(default=None),  # Read from HttpOnly Cookie
    desk: Desk = Depends(get_desk),
) -> Session:
    """Decode JWT from Header OR Cookie, look up the live session."""

    # Priority: Header > Cookie
    final_token = token
    if not final_token and access_token:
        if access_token.startswith("Bearer "):
            final_token = access_token.split(" ", 1)[1]
        else:
            final_token = access_token

    credentials_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not final_token:
        raise credentials_exc

    payload = decode_access_token(final_token)
    if payload is None or "sid" not in payload:
        raise credentials_exc

    session = desk.sessions.get(payload["sid"])
    if session is None:
        raise credentials_exc
    if session.is_client:
        account = desk.directory.find_by_phone(session.phone or "")
        if account is None or account.blocked:
            desk.sessions.discard(session.session_id)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is blocked")
    return session
