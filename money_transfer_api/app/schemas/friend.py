"""Pydantic models for friend lists."""

from typing import Optional

from pydantic import BaseModel


class AddFriendRequest(BaseModel):
    userEmail: Optional[str] = None
    searchQuery: Optional[str] = None
    token: Optional[str] = None


class RemoveFriendRequest(BaseModel):
    userEmail: Optional[str] = None
    friendEmail: Optional[str] = None
    token: Optional[str] = None


class FriendRead(BaseModel):
    """Snapshot of a user taken when the friend was added."""

    userEmail: str
    email: str
    name: Optional[str] = None
    surname: Optional[str] = None
