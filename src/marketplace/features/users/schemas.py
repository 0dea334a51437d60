from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from ..auth.models import Role, UserStatus
from ..auth.schemas import RegisterRequest, UserResponse


class UserCreate(RegisterRequest):
    """Admin-created accounts skip OTP verification and may be given any role."""
    role: Role = Field(Role.BUYER, description="Role of the new user")


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=3, max_length=32)
    year: Optional[int] = Field(None, ge=1900, le=2100)
    region_id: Optional[int] = None
    image: Optional[str] = Field(None, max_length=255)
    role: Optional[Role] = None
    status: Optional[UserStatus] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)


class UserWithRegionResponse(UserResponse):
    region_name: Optional[str] = Field(None, description="Name of the user's region")
