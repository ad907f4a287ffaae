"""Pydantic schemas for login and JWT session tokens."""

from __future__ import annotations

from pydantic import BaseModel


class LoginRequest(BaseModel):
    role: str
    password: str = ""
    phone: str = ""


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    identity: str


class SessionRead(BaseModel):
    role: str
    level: int
    identity: str
    phone: str | None = None


class LockoutRead(BaseModel):
    failed_attempts: int
    locked: bool
    remaining_seconds: int


class LogoutResponse(BaseModel):
    success: bool = True
    message: str
