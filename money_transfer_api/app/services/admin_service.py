"""Admin login and the fee schedule."""

import logging
from typing import Any, Dict, Optional

from ..core.errors import ValidationError
from ..core.security import authenticate_admin, require_admin_token
from ..core.storage import Store
from ..schemas.admin import AdminLoginRequest

logger = logging.getLogger(__name__)

FEE_SCHEDULE = {"baseFee": 1, "percentageFee": 0.005}


class AdminService:
    def __init__(self, store: Store) -> None:
        self.admins = store.awaitable(store.admins)

    async def login(self, data: AdminLoginRequest) -> Dict[str, Any]:
        if not data.email or not data.password:
            raise ValidationError("Email and password are required")
        logger.info("Admin login attempt for %s", data.email.strip().lower())
        return authenticate_admin(await self.admins.all(), data.email, data.password)

    async def fees(self, token: Optional[str]) -> Dict[str, Any]:
        require_admin_token(await self.admins.all(), token)
        return dict(FEE_SCHEDULE)
