"""Employee schemas"""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class EmployeeCreate(BaseModel):
    """Schema for hiring an employee into a department"""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone_number: str = Field("", max_length=50)
    address: str = Field("", max_length=500)
    position: str = Field("", max_length=100)
    salary: float = Field(0.0, ge=0)
    hire_date: date
    department_id: int


class EmployeeUpdate(BaseModel):
    """Fields an existing employee record may change"""

    phone_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)
    position: Optional[str] = Field(None, max_length=100)
    salary: Optional[float] = Field(None, ge=0)
    department_id: Optional[int] = None


class EmployeeResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: str
    address: str
    position: str
    salary: float
    hire_date: date
    department_id: int
    department_name: str
    created_at: datetime

    class Config:
        from_attributes = True
