from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from src.db.models.enums import UserRole


class TokenPair(BaseModel):
    """Access and refresh tokens."""
    token_type: str = Field("bearer", description="Token type, typically 'bearer'")
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")


class RefreshRequest(BaseModel):
    """Request to refresh an access token."""
    refresh_token: str = Field(..., description="Refresh token")


class RegisterRequest(BaseModel):
    """Registration details for creating a new user."""
    username: str = Field(..., min_length=3, max_length=64, description="Login name")
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=6, description="User password")
    full_name: Optional[str] = Field(None, description="Full name")


class UserRead(BaseModel):
    """User read model."""
    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Login name")
    email: EmailStr = Field(..., description="User email")
    full_name: Optional[str] = Field(None)
    role: UserRole = Field(..., description="Role")
    is_active: bool = Field(..., description="Active flag")
    created_at: datetime = Field(..., description="Created timestamp")
    updated_at: datetime = Field(..., description="Updated timestamp")

    class Config:
        from_attributes = True


class UserUpdate(BaseModel):
    """
    Partial user update.

    role and is_active may only be changed by an admin.
    """
    email: Optional[EmailStr] = Field(None)
    password: Optional[str] = Field(None, min_length=6)
    full_name: Optional[str] = Field(None)
    role: Optional[UserRole] = Field(None)
    is_active: Optional[bool] = Field(None)
