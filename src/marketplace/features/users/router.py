"""Admin-only user management routes."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, status

from ...common.pagination import Page, pagination
from ...common.schemas import MessageResponse
from ..auth.schemas import UserResponse
from ..auth.security import get_current_active_admin_user
from . import service
from .schemas import UserCreate, UserUpdate, UserWithRegionResponse

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    # Every route here is admin only
    dependencies=[Depends(get_current_active_admin_user)],
    responses={404: {"description": "Not found"}},
)


@router.get("/all", response_model=List[UserWithRegionResponse])
async def list_users(page: Annotated[Page, Depends(pagination)]):
    return await service.list_users(page)


@router.get("/byregion/{region_id}", response_model=List[UserWithRegionResponse])
async def list_users_by_region(region_id: int, page: Annotated[Page, Depends(pagination)]):
    return await service.list_users(page, region_id=region_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int):
    return await service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate):
    return await service.create_user(user_in)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, user_in: UserUpdate):
    return await service.update_user(user_id, user_in)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: int):
    await service.delete_user(user_id)
    return {"message": "User deleted successfully"}
