"""Pydantic models for user accounts."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, example="Ada")
    surname: Optional[str] = Field(None, example="Lovelace")
    email: Optional[str] = Field(None, example="ada@example.com")
    password: Optional[str] = Field(None, example="secret1")
    country: Optional[str] = Field(None, example="Gabon")
    userType: Optional[str] = Field(None, example="individual", description="individual or business")
    businessName: Optional[str] = Field(None, description="Required when userType is business")
    businessDescription: Optional[str] = None
    role: Optional[str] = Field(None, example="user")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SettingsUpdate(BaseModel):
    """Payment preferences.  Only the fields present in the body are changed."""

    email: Optional[str] = None
    token: Optional[str] = None
    receiveMethod: Optional[str] = None
    receiveDetails: Optional[Any] = None
    sendMethod: Optional[str] = None


class ProfileUpdate(BaseModel):
    """Profile fields.  Which of them apply depends on the stored userType."""

    email: Optional[str] = None
    token: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    businessName: Optional[str] = None
    businessDescription: Optional[str] = None
    profilePic: Optional[str] = None


class UserRead(BaseModel):
    """Public view of a user record."""

    id: int
    name: Optional[str] = None
    surname: Optional[str] = None
    email: str
    country: Optional[str] = None
    userType: str = "individual"
    businessName: Optional[str] = None
    businessDescription: Optional[str] = None
    address: Optional[str] = None
    token: Optional[str] = None
    receiveMethod: Optional[str] = None
    receiveDetails: Optional[Any] = None
    sendMethod: Optional[str] = None
    role: str = "user"
    profilePic: Optional[str] = None
