"""
Item endpoints: accept, issue, return and list deposited items.

- Listing is open to every session; clients only see their own items.
- Accepting needs head-cashier, issuing and returning need cashier.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from qrdocs.api.v1.deps import get_current_session, get_desk
from qrdocs.models.item import Item, ItemDraft
from qrdocs.models.session import Session
from qrdocs.schemas.item import ItemCreate, ItemRead
from qrdocs.services.desk import Desk

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=list[ItemRead])
async def list_items(
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> list[Item]:
    return desk.ledger.visible_items(session)


@router.post("", response_model=ItemRead, status_code=201)
async def create_item(
    body: ItemCreate,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> Item:
    """Accept an item into storage and issue its QR code."""
    return desk.ledger.create_item(session, ItemDraft(**body.model_dump()))


@router.get("/archive", response_model=list[ItemRead])
async def list_archive(
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> list[Item]:
    return desk.ledger.visible_archive(session)


@router.get("/qr/{qr_code}", response_model=ItemRead)
async def get_item_by_qr(
    qr_code: str,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> Item:
    """Look up a scanned QR code in storage and archive."""
    return desk.ledger.find_by_qr(session, qr_code)


@router.post("/{item_id}/issue", response_model=ItemRead)
async def issue_item(
    item_id: str,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> Item:
    """Hand the item back to its owner; it moves to the archive."""
    return desk.ledger.issue_item(session, item_id)


@router.post("/{item_id}/return", response_model=ItemRead)
async def return_item(
    item_id: str,
    session: Session = Depends(get_current_session),
    desk: Desk = Depends(get_desk),
) -> Item:
    """Put an issued item back into storage."""
    return desk.ledger.return_item(session, item_id)
