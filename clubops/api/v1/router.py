"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from clubops.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from clubops.api.v1.endpoints import approvals, events, finance, health, inventory, roles

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(approvals.router, prefix="/approvals", tags=["approvals"])
api_router.include_router(finance.router, prefix="/finance", tags=["finance"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
