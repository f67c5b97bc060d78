"""Leave request schemas"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from sge.models.leave_request import LeaveStatus, LeaveType


class LeaveRequestCreate(BaseModel):
    """Schema for submitting a leave request"""

    employee_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str = Field("", max_length=1000)


class LeaveStatusUpdate(BaseModel):
    """Status change - Approved, Rejected or Cancelled"""

    status: LeaveStatus
    manager_comments: Optional[str] = Field(None, max_length=1000)


class LeaveRequestResponse(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    days_requested: int
    reason: str
    status: LeaveStatus
    manager_comments: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class RemainingLeaveResponse(BaseModel):
    employee_id: int
    year: int
    remaining_days: int
