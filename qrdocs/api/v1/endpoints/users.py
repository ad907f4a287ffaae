"""
Directory endpoints: account creation and block toggling (nikitovsky+).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from qrdocs.api.v1.deps import get_current_session, get_desk
from qrdocs.models.session import Session
from qrdocs.models.user import UserAccount
from qrdocs.schemas.user import UserCreate, UserRead
from qrdocs.services.desk import Desk

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> list[UserAccount]:
    return desk.directory.list_users(session)


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    body: UserCreate,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> UserAccount:
    """Register an account; only role24 may grant a staff role."""
    return desk.directory.create_user(session, body.username, body.phone, body.role)


@router.post("/{phone}/toggle-block", response_model=UserRead)
async def toggle_block(
    phone: str,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> UserAccount:
    return desk.directory.toggle_block(session, phone)
