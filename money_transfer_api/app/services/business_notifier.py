"""
Outbound notification to the business-partner service.

When a business account registers, its details are posted to
``{business_service_url}/register-business``.  The call runs after the
registration response has been produced and its outcome never reaches
the client: failures are logged and dropped, with no retry.
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class BusinessNotifier:
    """Posts new business registrations to the partner service."""

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self.url = f"{base_url.rstrip('/')}/register-business"
        self.timeout = timeout
        self._transport = transport

    @staticmethod
    def build_payload(user: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "email": user.get("email"),
            "password": user.get("password"),
            "country": user.get("country"),
            "businessName": user.get("businessName"),
            "businessDescription": user.get("businessDescription"),
        }

    async def notify_registration(self, user: Dict[str, Any]) -> bool:
        """Send the registration.  Returns True if the partner accepted it."""
        payload = self.build_payload(user)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Error syncing %s with business server: %r", payload["email"], exc)
            return False
        logger.info("Business account %s synced with partner service", payload["email"])
        return True
