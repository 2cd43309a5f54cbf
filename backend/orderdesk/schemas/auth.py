"""Auth schemas"""
from typing import Optional
from datetime import datetime
from pydantic import Field

from orderdesk.schemas.base import ApiModel


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1, description="Login email")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(ApiModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    customer_id: Optional[int] = None
    status: Optional[int] = None


class UserResponse(ApiModel):
    id: int
    email: str
    role: str
    customer_id: Optional[int] = None
    lookup_code: Optional[str] = None
    status: int
    created_at: Optional[datetime] = None


class LoginResponse(ApiModel):
    token: str
    user: UserResponse


class TokenResponse(ApiModel):
    token: str
