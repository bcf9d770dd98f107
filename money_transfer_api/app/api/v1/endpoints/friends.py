"""Friend list endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from money_transfer_api.app.core.deps import get_friend_service
from money_transfer_api.app.schemas.friend import AddFriendRequest, FriendRead, RemoveFriendRequest
from money_transfer_api.app.schemas.user import UserRead
from money_transfer_api.app.services.friend_service import FriendService

router = APIRouter()


@router.get("/friends", response_model=List[FriendRead])
async def list_friends(
    email: Optional[str] = Query(None, description="Owner of the friend list"),
    token: Optional[str] = Query(None),
    service: FriendService = Depends(get_friend_service),
) -> List[dict]:
    return await service.list_friends(email, token)


@router.post("/add-friend", response_model=UserRead)
async def add_friend(payload: AddFriendRequest, service: FriendService = Depends(get_friend_service)) -> dict:
    """Look a user up by email, name or surname and add them as a friend.

    Responds with the matched user, or 404 when the search finds nobody.
    """
    return await service.add(payload)


@router.post("/remove-friend")
async def remove_friend(payload: RemoveFriendRequest, service: FriendService = Depends(get_friend_service)) -> dict:
    return await service.remove(payload)
