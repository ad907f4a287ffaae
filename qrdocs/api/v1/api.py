"""
V1 API router aggregator: wires all endpoint modules together.
"""

from fastapi import APIRouter

from qrdocs.api.v1.endpoints import auth, health, items, users

api_router = APIRouter()

# Auth (login, logout, session, lockout countdown)
api_router.include_router(auth.router)

# Items: accept, issue, return, archive
api_router.include_router(items.router)

# Directory accounts
api_router.include_router(users.router)

# Health
api_router.include_router(health.router)
