"""Authentication schemas"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for registering a new account"""

    email: EmailStr
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, description="Checked against the password policy")
    confirm_password: Optional[str] = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    employee_id: Optional[int] = Field(None, description="Employee record to link the account to")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    """Access token (may be expired) plus the refresh token issued with it"""

    access_token: str
    refresh_token: str


class RevokeTokenRequest(BaseModel):
    refresh_token: str


class UpdateUserRequest(BaseModel):
    """Profile patch - empty or missing fields are left unchanged"""

    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone_number: Optional[str] = Field(None, max_length=50)


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    roles: List[str] = []
    employee_id: Optional[int] = None


class AuthResponse(BaseModel):
    """Token pair returned by register, login and refresh"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
