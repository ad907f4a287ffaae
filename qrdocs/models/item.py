"""
Deposited item record and the draft used to create one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Category(str, Enum):
    DOCUMENTS = "documents"
    PHOTOS = "photos"
    MAPS = "maps"
    OTHER = "other"


class ItemStatus(str, Enum):
    STORED = "stored"
    ISSUED = "issued"


@dataclass
class ItemDraft:
    name: str
    client_name: str
    client_phone: str
    category: Category | str = Category.DOCUMENTS
    client_email: str | None = None
    deposit_date: date | None = None
    pickup_date: date | None = None
    deposit_amount: float = 0
    pickup_amount: float = 0


@dataclass(frozen=True)
class Item:
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
