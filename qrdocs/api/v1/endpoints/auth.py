"""
Auth endpoints: role login, logout, current session and lockout status.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from qrdocs.api.v1.deps import get_current_session, get_desk, get_lockout_key
from qrdocs.core.config import settings
from qrdocs.core.roles import ENTRY_POINTS, ROLE_NAMES, Role
from qrdocs.core.security import create_access_token
from qrdocs.models.session import Session
from qrdocs.schemas.token import LockoutRead, LoginRequest, LogoutResponse, SessionRead, Token
from qrdocs.schemas.user import RoleRead
from qrdocs.services.desk import Desk

# Rate limiter: keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.get("/roles", response_model=list[RoleRead])
async def list_entry_points() -> list[RoleRead]:
    """Roles offered on the login screen."""
    return [
        RoleRead(
            role=role,
            name=ROLE_NAMES[role],
            level=role.level,
            password_required=role is not Role.CLIENT,
        )
        for role in ENTRY_POINTS
    ]


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    desk: Desk = Depends(get_desk),
    lockout_key: str = Depends(get_lockout_key),
) -> Token:
    """Resolve a role + password (or client phone) into a session token."""
    session = desk.auth.authenticate(
        body.role, body.password, body.phone, lockout_key=lockout_key
    )
    desk.sessions.add(session)
    access_token = create_access_token(session.to_claims())

    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        secure=settings.COOKIE_SECURE,  # Set to True in HTTPS production
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return Token(access_token=access_token, role=session.role.value, identity=session.identity)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> LogoutResponse:
    """Drop the session and clear the auth cookie. Lockout state is kept."""
    desk.sessions.discard(session.session_id)
    response.delete_cookie("access_token")
    logger.info("Logout: %s", session.identity)
    return LogoutResponse(message="Logged out")


@router.get("/me", response_model=SessionRead)
async def read_current_session(session: Session = Depends(get_current_session)) -> SessionRead:
    return SessionRead(
        role=session.role.value,
        level=session.role.level,
        identity=session.identity,
        phone=session.phone,
    )


@router.get("/lockout", response_model=LockoutRead)
async def lockout_status(
    desk: Desk = Depends(get_desk),
    lockout_key: str = Depends(get_lockout_key),
) -> LockoutRead:
    """Countdown data for the login screen."""
    now = desk.lockout.clock()
    state = desk.lockout.state(lockout_key, now)
    return LockoutRead(
        failed_attempts=state.failed_attempts,
        locked=state.is_locked(now),
        remaining_seconds=state.remaining_seconds(now),
    )
