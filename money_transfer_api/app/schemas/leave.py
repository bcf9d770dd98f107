"""
Pydantic models for leave requests.

A leave request starts out ``pending`` and may move once, to either
``approved`` or ``rejected``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LeaveRequestCreate(BaseModel):
    employeeName: Optional[str] = Field(None, example="Jane Doe")
    startDate: Optional[str] = Field(None, example="2026-11-02")
    endDate: Optional[str] = Field(None, example="2026-11-06")
    reason: Optional[str] = Field(None, example="Family trip")
    status: Optional[str] = Field(None, example="pending")
    token: Optional[str] = None


class LeaveStatusUpdate(BaseModel):
    status: Optional[str] = Field(None, example="approved")
    token: Optional[str] = None


class LeaveRequestRead(BaseModel):
    id: int
    employeeName: str
    startDate: str
    endDate: str
    reason: str
    status: str
    timestamp: str


class LeaveStats(BaseModel):
    total: int
    approved: int
    pending: int
    rejected: int
