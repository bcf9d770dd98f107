"""
Top-level router for version 1 of the API.

Aggregates the domain routers.  Paths are defined in full inside each
module because the web client expects them at fixed locations
(``/register``, ``/admin/fees`` and so on).
"""

from fastapi import APIRouter

from .endpoints import admin, friends, leave_requests, transfers, users

router = APIRouter()

router.include_router(users.router, tags=["users"])
router.include_router(admin.router, tags=["admin"])
router.include_router(leave_requests.router, tags=["leave-requests"])
router.include_router(transfers.router, tags=["transfers"])
router.include_router(friends.router, tags=["friends"])
