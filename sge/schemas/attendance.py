"""Attendance schemas"""
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, Field


class ClockInOutRequest(BaseModel):
    """Clock-in or clock-out; ``at`` defaults to the server's current time"""

    employee_id: int
    at: Optional[datetime] = None
    notes: str = Field("", max_length=500)


class AttendanceCreate(BaseModel):
    """Manual attendance entry for a whole day"""

    employee_id: int
    date: date
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None
    break_minutes: int = Field(0, ge=0, le=24 * 60)
    notes: str = Field("", max_length=1000)


class AttendanceResponse(BaseModel):
    id: int
    employee_id: int
    employee_name: str
    date: date
    clock_in: Optional[time] = None
    clock_out: Optional[time] = None
    break_minutes: Optional[int] = None
    worked_hours: float
    overtime_hours: float
    notes: str
    created_at: datetime

    class Config:
        from_attributes = True


class MonthlyHoursResponse(BaseModel):
    employee_id: int
    year: int
    month: int
    worked_hours: float
