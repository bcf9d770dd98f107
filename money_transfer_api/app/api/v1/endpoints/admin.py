"""
Admin endpoints.

Admins come from a static list loaded at startup.  Login checks the
credential pair; the fee lookup checks the admin's stored token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from money_transfer_api.app.core.deps import get_admin_service
from money_transfer_api.app.schemas.admin import AdminIdentity, AdminLoginRequest, FeeSchedule
from money_transfer_api.app.services.admin_service import AdminService

router = APIRouter()


@router.post("/admin-login", response_model=AdminIdentity)
async def admin_login(payload: AdminLoginRequest, service: AdminService = Depends(get_admin_service)) -> dict:
    return await service.login(payload)


@router.get("/admin/fees", response_model=FeeSchedule)
async def admin_fees(
    token: Optional[str] = Query(None),
    service: AdminService = Depends(get_admin_service),
) -> dict:
    """Return the transfer fee schedule.  Requires an admin token."""
    return await service.fees(token)
