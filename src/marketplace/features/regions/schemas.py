from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..auth.models import Role, UserStatus


class RegionBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, description="Name of the region")


class RegionCreate(RegionBase):
    pass


class RegionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50, description="New name of the region")


class RegionResponse(RegionBase):
    id: int

    model_config = ConfigDict(
        from_attributes=True,
        protected_namespaces=(),
    )


class RegionUserSummary(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    status: UserStatus

    model_config = ConfigDict(from_attributes=True)


class RegionWithUsersResponse(RegionResponse):
    users: List[RegionUserSummary] = Field(default_factory=list, description="Users registered in the region")
