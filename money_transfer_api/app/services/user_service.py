"""
Business logic for user accounts.

Covers registration, login, search and the two self-service update
operations.  Users are keyed by email.  Their integer id comes from
the store and is never reused.
"""

import logging
import re
from typing import Any, Dict, Optional

from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from ..core.security import (
    generate_address,
    generate_session_token,
    hash_password,
    is_session_token,
    verify_password,
)
from ..core.storage import Store
from ..schemas.user import LoginRequest, ProfileUpdate, RegisterRequest, SettingsUpdate

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
INDIVIDUAL = "individual"
BUSINESS = "business"
USER_TYPES = (INDIVIDUAL, BUSINESS)

SETTINGS_FIELDS = ("receiveMethod", "receiveDetails", "sendMethod")

# Profile field -> user types allowed to change it (None means every type).
PROFILE_FIELD_RULES = {
    "name": None,
    "surname": {INDIVIDUAL},
    "businessName": {BUSINESS},
    "businessDescription": {BUSINESS},
    "profilePic": None,
}


def search_query(q: str) -> Dict[str, Any]:
    """Filter matching ``q`` as an exact email or a name/surname fragment."""
    fragment = {"$regex": re.escape(q), "$options": "i"}
    return {"$or": [{"email": q}, {"name": fragment}, {"surname": fragment}]}


class UserService:
    def __init__(self, store: Store) -> None:
        self.users = store.awaitable(store.users)

    async def register(self, data: RegisterRequest) -> Dict[str, Any]:
        """Create a user and return the stored record (including its hash).

        Validation happens before anything is written, so a rejected
        registration leaves the store untouched.
        """
        user_type = data.userType or INDIVIDUAL
        if not data.email or not data.password or not data.name or (user_type == BUSINESS and not data.businessName):
            raise ValidationError("Missing required fields")
        if user_type not in USER_TYPES:
            raise ValidationError("Invalid user type")
        if len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if await self.users.find_one({"email": data.email}) is not None:
            raise ConflictError("Email already registered")

        is_business = user_type == BUSINESS
        user = await self.users.insert(
            {
                "name": data.name,
                "surname": data.surname,
                "email": data.email,
                "password": hash_password(data.password),
                "country": data.country,
                "userType": user_type,
                "businessName": data.businessName if is_business else None,
                "businessDescription": data.businessDescription if is_business else None,
                "address": generate_address(),
                "token": generate_session_token(),
                "receiveMethod": None,
                "receiveDetails": None,
                "sendMethod": None,
                "role": data.role or "user",
                "profilePic": None,
            }
        )
        logger.info("Registered %s user %s (id=%s)", user_type, user["email"], user["id"])
        return user

    async def login(self, data: LoginRequest) -> Dict[str, Any]:
        if not data.email or not data.password:
            raise ValidationError("Please enter both email and password")
        user = await self.users.find_one({"email": data.email})
        if user is None or not verify_password(data.password, user.get("password")):
            raise AuthError("Invalid credentials")
        return user

    async def search(self, q: Optional[str], token: Optional[str]) -> Optional[Dict[str, Any]]:
        if not q or not is_session_token(token):
            raise ValidationError("Invalid query or token")
        return await self.users.find_one(search_query(q))

    async def update_settings(self, data: SettingsUpdate) -> Dict[str, Any]:
        if not data.email or not is_session_token(data.token):
            raise ValidationError("Invalid input")
        fields = data.model_dump(include=set(SETTINGS_FIELDS), exclude_unset=True)
        user = await self.users.update({"email": data.email}, fields)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, data: ProfileUpdate) -> Dict[str, Any]:
        if not data.email or not is_session_token(data.token):
            raise ValidationError("Invalid input")
        current = await self.users.find_one({"email": data.email})
        if current is None:
            raise NotFoundError("User not found")
        supplied = data.model_dump(include=set(PROFILE_FIELD_RULES), exclude_unset=True)
        user_type = current.get("userType")
        fields = {
            name: value
            for name, value in supplied.items()
            if PROFILE_FIELD_RULES[name] is None or user_type in PROFILE_FIELD_RULES[name]
        }
        user = await self.users.update({"email": data.email}, fields)
        if user is None:
            raise NotFoundError("User not found")
        return user
