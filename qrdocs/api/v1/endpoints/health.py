"""Public health check."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from qrdocs.api.v1.deps import get_desk
from qrdocs.core.config import settings
from qrdocs.schemas.item import HealthResponse
from qrdocs.services.desk import Desk

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(desk: Desk = Depends(get_desk)) -> HealthResponse:
    return HealthResponse(
        version=settings.VERSION,
        active_items=desk.ledger.active_count,
        archived_items=desk.ledger.archive_count,
    )
