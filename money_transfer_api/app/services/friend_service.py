"""
Friend lists.

A friend entry is a snapshot of another user's email, name and
surname taken when it was added; later profile changes do not flow
into it.  Entries are keyed by (``userEmail``, ``email``).
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.security import is_session_token
from ..core.storage import Store
from ..schemas.friend import AddFriendRequest, RemoveFriendRequest
from .user_service import search_query

logger = logging.getLogger(__name__)


class FriendService:
    def __init__(self, store: Store) -> None:
        self.users = store.awaitable(store.users)
        self.friends = store.awaitable(store.friends)

    async def list_friends(self, email: Optional[str], token: Optional[str]) -> List[Dict[str, Any]]:
        if not email or not is_session_token(token):
            raise ValidationError("Invalid email or token")
        return await self.friends.find_many({"userEmail": email})

    async def add(self, data: AddFriendRequest) -> Dict[str, Any]:
        """Find a user by ``searchQuery`` and add them to the owner's list.

        Returns the matched user record.
        """
        if not data.userEmail or not data.searchQuery or not is_session_token(data.token):
            raise ValidationError("Invalid input")
        friend = await self.users.find_one(search_query(data.searchQuery))
        if friend is None:
            raise NotFoundError("User not found")
        key = {"userEmail": data.userEmail, "email": friend["email"]}
        if await self.friends.find_one(key) is None:
            await self.friends.insert({**key, "name": friend.get("name"), "surname": friend.get("surname")})
            logger.info("%s added friend %s", data.userEmail, friend["email"])
        return friend

    async def remove(self, data: RemoveFriendRequest) -> Dict[str, bool]:
        if not data.userEmail or not data.friendEmail or not is_session_token(data.token):
            raise ValidationError("Invalid input")
        removed = await self.friends.delete({"userEmail": data.userEmail, "email": data.friendEmail})
        if removed:
            logger.info("%s removed friend %s", data.userEmail, data.friendEmail)
        return {"success": True}
