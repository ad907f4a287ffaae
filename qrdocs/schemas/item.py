"""Pydantic schemas for deposited items."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from qrdocs.models.item import Category, ItemStatus


class ItemCreate(BaseModel):
    name: str = ""
    category: str = "documents"
    client_name: str = ""
    client_phone: str = ""
    client_email: str | None = None
    deposit_date: date | None = None
    pickup_date: date | None = None
    deposit_amount: float = Field(default=0)
    pickup_amount: float = Field(default=0)


class ItemRead(BaseModel):
    id: str
    name: str
    category: Category
    client_name: str
    client_phone: str
    client_email: str | None
    deposit_date: date
    pickup_date: date | None
    deposit_amount: float
    pickup_amount: float
    status: ItemStatus
    qr_code: str

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_items: int
    archived_items: int
