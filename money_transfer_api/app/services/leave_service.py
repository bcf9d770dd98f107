"""
Leave request tracking.

Requests are created ``pending`` (unless the submitter sets another
valid status) and can be decided exactly once::

    pending --approve--> approved
    pending --reject---> rejected

Decided requests are final.  Only ``approved`` and ``rejected`` are
accepted as update targets; anything else, ``pending`` included, is
invalid input.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.security import require_session_token
from ..core.storage import Store
from ..core.timeutils import utc_timestamp
from ..schemas.leave import LeaveRequestCreate, LeaveStatusUpdate

logger = logging.getLogger(__name__)

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
STATUSES = (PENDING, APPROVED, REJECTED)
DECISIONS = (APPROVED, REJECTED)


class LeaveService:
    def __init__(self, store: Store) -> None:
        self.requests = store.awaitable(store.leave_requests)

    async def list_requests(self, token: Optional[str]) -> List[Dict[str, Any]]:
        require_session_token(token)
        return await self.requests.all()

    async def stats(self, token: Optional[str]) -> Dict[str, int]:
        require_session_token(token)
        counts = {status: await self.requests.count({"status": status}) for status in STATUSES}
        return {"total": await self.requests.count(), **counts}

    async def create(self, data: LeaveRequestCreate) -> Dict[str, Any]:
        if not data.employeeName or not data.startDate or not data.endDate or not data.reason or not data.token:
            raise ValidationError("Missing required fields")
        require_session_token(data.token)
        status = data.status or PENDING
        if status not in STATUSES:
            raise ValidationError("Invalid status")
        request = await self.requests.insert(
            {
                "employeeName": data.employeeName,
                "startDate": data.startDate,
                "endDate": data.endDate,
                "reason": data.reason,
                "status": status,
                "timestamp": utc_timestamp(),
            }
        )
        logger.info("Leave request %s submitted for %s", request["id"], request["employeeName"])
        return request

    async def update_status(self, request_id: str, data: LeaveStatusUpdate) -> Dict[str, Any]:
        """Decide a pending request.

        The pending check is part of the update filter, so two racing
        decisions cannot both succeed.  An id that is not an integer
        names no request.
        """
        require_session_token(data.token)
        if data.status not in DECISIONS:
            raise ValidationError("Invalid status")
        try:
            key = int(request_id)
        except (TypeError, ValueError):
            raise NotFoundError("Leave request not found") from None
        updated = await self.requests.update({"id": key, "status": PENDING}, {"status": data.status})
        if updated is None:
            current = await self.requests.find_one({"id": key})
            if current is None:
                raise NotFoundError("Leave request not found")
            raise ValidationError(f"Leave request is already {current.get('status')}")
        logger.info("Leave request %s %s", key, data.status)
        return updated
