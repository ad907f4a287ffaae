"""
Item ledger: the active and archive collections and their transitions.

An item lives in exactly one of the two collections.  ``issue_item`` moves
it from active to archive, ``return_item`` moves it back; both run under
the ledger lock so two concurrent issues of the same id cannot both win.
"""

from __future__ import annotations

import logging
import secrets
import string
import threading
import time
from dataclasses import replace
from datetime import date
from typing import Iterable

from qrdocs.core.errors import DuplicateId, InvalidField, MissingField, NotFound
from qrdocs.core.roles import Role, authorize
from qrdocs.models.item import Category, Item, ItemDraft, ItemStatus
from qrdocs.models.session import Session
from qrdocs.models.user import normalize_phone

logger = logging.getLogger(__name__)

ACCEPT_ROLE = Role.HEAD_CASHIER
ISSUE_ROLE = Role.CASHIER

_QR_ALPHABET = string.ascii_uppercase + string.digits


class TokenGenerator:
    """Time-seeded ids and QR tokens, unique for the life of the process."""

    def __init__(self) -> None:
        self._last_id = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            candidate = time.time_ns() // 1000
            self._last_id = max(candidate, self._last_id + 1)
            return str(self._last_id)

    def qr_code(self) -> str:
        suffix = "".join(secrets.choice(_QR_ALPHABET) for _ in range(9))
        return f"QR-{int(time.time() * 1000)}-{suffix}"


def _amount(field: str, value) -> float:
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        raise InvalidField(field, "must be a number") from None
    if amount < 0:
        raise InvalidField(field, "must not be negative")
    return amount


class ItemLedger:
    def __init__(self, tokens: TokenGenerator | None = None) -> None:
        self.tokens = tokens or TokenGenerator()
        self._active: dict[str, Item] = {}
        self._archive: dict[str, Item] = {}
        self._qr_codes: set[str] = set()
        self._lock = threading.RLock()

    def _validate(self, draft: ItemDraft) -> dict:
        fields = {
            "name": (draft.name or "").strip(),
            "client_name": (draft.client_name or "").strip(),
            "client_phone": normalize_phone(draft.client_phone),
        }
        for name, value in fields.items():
            if not value:
                raise MissingField(name)
        try:
            category = Category(draft.category or Category.DOCUMENTS)
        except ValueError:
            raise InvalidField("category", f"unknown category {draft.category!r}") from None
        if draft.pickup_date and draft.deposit_date and draft.pickup_date < draft.deposit_date:
            raise InvalidField("pickup_date", "must not be before the deposit date")
        return {
            **fields,
            "category": category,
            "client_email": (draft.client_email or "").strip() or None,
            "deposit_date": draft.deposit_date or date.today(),
            "pickup_date": draft.pickup_date,
            "deposit_amount": _amount("deposit_amount", draft.deposit_amount),
            "pickup_amount": _amount("pickup_amount", draft.pickup_amount),
        }

    def create_item(self, session: Session, draft: ItemDraft) -> Item:
        authorize(session, ACCEPT_ROLE)
        fields = self._validate(draft)
        with self._lock:
            item_id = self.tokens.next_id()
            if item_id in self._active or item_id in self._archive:
                raise DuplicateId(item_id)
            qr_code = self.tokens.qr_code()
            while qr_code in self._qr_codes:
                qr_code = self.tokens.qr_code()
            item = Item(id=item_id, status=ItemStatus.STORED, qr_code=qr_code, **fields)
            self._active[item_id] = item
            self._qr_codes.add(qr_code)
        logger.info("Item %s accepted (%s) by %s", item.id, item.qr_code, session.identity)
        return item

    def issue_item(self, session: Session, item_id: str) -> Item:
        authorize(session, ISSUE_ROLE)
        with self._lock:
            item = self._active.pop(item_id, None)
            if item is None:
                raise NotFound(item_id)
            issued = replace(item, status=ItemStatus.ISSUED)
            self._archive[item_id] = issued
        logger.info("Item %s issued by %s", item_id, session.identity)
        return issued

    def return_item(self, session: Session, item_id: str) -> Item:
        authorize(session, ISSUE_ROLE)
        with self._lock:
            item = self._archive.pop(item_id, None)
            if item is None:
                raise NotFound(item_id)
            stored = replace(item, status=ItemStatus.STORED)
            self._active[item_id] = stored
        logger.info("Item %s returned to storage by %s", item_id, session.identity)
        return stored

    # ── Views ───────────────────────────────────────────────────────
    @staticmethod
    def _visible(session: Session, items: Iterable[Item]) -> list[Item]:
        if session.is_client:
            phone = normalize_phone(session.phone)
            return [i for i in items if i.client_phone == phone]
        return list(items)

    def visible_items(self, session: Session) -> list[Item]:
        with self._lock:
            return self._visible(session, self._active.values())

    def visible_archive(self, session: Session) -> list[Item]:
        with self._lock:
            return self._visible(session, self._archive.values())

    def find_by_qr(self, session: Session, qr_code: str) -> Item:
        with self._lock:
            for item in (*self._active.values(), *self._archive.values()):
                if item.qr_code == qr_code:
                    found = self._visible(session, [item])
                    if found:
                        return found[0]
                    break
        raise NotFound(qr_code)

    @property
    def active_count(self) -> int:
        return len(self._active)

    @property
    def archive_count(self) -> int:
        return len(self._archive)
