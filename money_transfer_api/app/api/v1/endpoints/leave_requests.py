"""Leave request endpoints and their summary statistics."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from money_transfer_api.app.core.deps import get_leave_service
from money_transfer_api.app.schemas.leave import (
    LeaveRequestCreate,
    LeaveRequestRead,
    LeaveStats,
    LeaveStatusUpdate,
)
from money_transfer_api.app.services.leave_service import LeaveService

router = APIRouter()


@router.get("/leave-requests", response_model=List[LeaveRequestRead])
async def list_leave_requests(
    token: Optional[str] = Query(None),
    service: LeaveService = Depends(get_leave_service),
) -> List[dict]:
    return await service.list_requests(token)


@router.get("/stats", response_model=LeaveStats)
async def leave_stats(
    token: Optional[str] = Query(None),
    service: LeaveService = Depends(get_leave_service),
) -> dict:
    """Count leave requests in total and per status."""
    return await service.stats(token)


@router.post("/leave-requests", response_model=LeaveRequestRead, status_code=status.HTTP_201_CREATED)
async def create_leave_request(
    payload: LeaveRequestCreate,
    service: LeaveService = Depends(get_leave_service),
) -> dict:
    return await service.create(payload)


@router.put("/leave-requests/{request_id}", response_model=LeaveRequestRead)
async def update_leave_request(
    request_id: str,
    payload: LeaveStatusUpdate,
    service: LeaveService = Depends(get_leave_service),
) -> dict:
    """Approve or reject a pending leave request."""
    return await service.update_status(request_id, payload)
