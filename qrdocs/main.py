"""
QR Docs storage desk: application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `services/`, `models/`, and `core/` packages.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from qrdocs.api.v1.api import api_router
from qrdocs.api.v1.endpoints.auth import limiter
from qrdocs.core.config import Settings, settings
from qrdocs.core.exceptions import register_exception_handlers
from qrdocs.services.desk import Desk

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


async def _lockout_ticker(desk: Desk, interval: float) -> None:
    """Expire passed lockout windows without waiting for the next login."""
    while True:
        await asyncio.sleep(interval)
        desk.lockout.sweep()


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    desk: Desk = app.state.desk
    ticker = asyncio.create_task(
        _lockout_ticker(desk, desk.settings.LOCKOUT_TICK_SECONDS)
    )
    logger.info("QR Docs v%s started", desk.settings.VERSION)
    yield
    ticker.cancel()
    try:
        await ticker
    except asyncio.CancelledError:
        pass
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app(app_settings: Settings | None = None, desk: Desk | None = None) -> FastAPI:
    app_settings = app_settings or settings
    application = FastAPI(
        title="QR Docs",
        description="Storage desk for deposited documents and items",
        version=app_settings.VERSION,
        openapi_url=f"{app_settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.desk = desk or Desk(app_settings)

    # Login throttling
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handlers (prevent stack-trace leakage)
    register_exception_handlers(application)

    # Mount API v1
    application.include_router(api_router, prefix=app_settings.API_V1_PREFIX)

    return application


app = create_app()
