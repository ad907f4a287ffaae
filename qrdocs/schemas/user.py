"""Pydantic schemas for directory accounts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from qrdocs.core.roles import Role


class UserCreate(BaseModel):
    username: str = ""
    phone: str = ""
    role: str = "client"


class UserRead(BaseModel):
    username: str
    phone: str
    role: Role
    blocked: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class RoleRead(BaseModel):
    role: Role
    name: str
    level: int
    password_required: bool
