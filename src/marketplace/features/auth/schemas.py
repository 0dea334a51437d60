"""Pydantic schemas for authentication, defining the structure for request and response data."""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .models import Role, UserStatus


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    phone: str = Field(..., min_length=3, max_length=32, description="Contact phone number")
    year: int = Field(..., ge=1900, le=2100, description="Birth year")
    region_id: int = Field(..., description="ID of the region the user lives in")
    image: Optional[str] = Field(None, max_length=255, description="Avatar image reference")


class RegisterRequest(UserBase):
    # bcrypt only looks at the first 72 bytes.
    password: str = Field(..., min_length=6, max_length=72, description="User password")


class VerifyRequest(BaseModel):
    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=12, description="One-time code from the email")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: str
    year: int
    image: Optional[str] = None
    role: Role = Field(..., description="User role (admin, seller or buyer)")
    status: UserStatus = Field(..., description="Account verification status")
    region_id: int
    created_at: datetime.datetime = Field(
        ..., description="Timestamp of when the user was created"
    )
    updated_at: datetime.datetime = Field(
        ..., description="Timestamp of when the user was last updated"
    )

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )


class LoginResponse(BaseModel):
    """Either a token pair, or just a message for accounts still pending verification."""
    message: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenClaims(BaseModel):
    """Identity carried by an access token. This is all the Auth Gate knows about a caller."""
    id: int
    role: Role
    status: UserStatus
