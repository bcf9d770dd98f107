"""Pydantic models for the admin endpoints."""

from typing import Optional

from pydantic import BaseModel


class AdminLoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class AdminIdentity(BaseModel):
    email: str
    isAdmin: bool = True


class FeeSchedule(BaseModel):
    baseFee: float
    percentageFee: float
