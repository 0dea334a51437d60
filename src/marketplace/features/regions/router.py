"""API routes for managing regions."""
from typing import List, Annotated

from fastapi import APIRouter, Depends, status

from ...common.pagination import Page, pagination
from ...common.schemas import MessageResponse
from ..auth.security import AdminUser, CurrentUser
from . import service
from .schemas import RegionCreate, RegionResponse, RegionUpdate, RegionWithUsersResponse

router = APIRouter(
    prefix="/regions",
    tags=["Regions"],
    responses={404: {"description": "Not found"}},
)


@router.post(
    "",
    response_model=RegionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new region",
)
async def create_region(region_in: RegionCreate, current_admin: AdminUser):
    return await service.create_region(region_in)


@router.get(
    "",
    response_model=List[RegionWithUsersResponse],
    summary="List regions with their users",
)
@router.get("/all", response_model=List[RegionWithUsersResponse], include_in_schema=False)
async def list_regions(
    current_user: CurrentUser,
    page: Annotated[Page, Depends(pagination)],
):
    return await service.list_regions(page)


@router.get("/{region_id}", response_model=RegionResponse, summary="Get a specific region")
async def get_region(region_id: int, current_admin: AdminUser):
    return await service.get_region(region_id)


@router.patch("/{region_id}", response_model=RegionResponse, summary="Update a region")
async def update_region(region_id: int, region_in: RegionUpdate, current_admin: AdminUser):
    return await service.update_region(region_id, region_in)


@router.delete("/{region_id}", response_model=MessageResponse, summary="Delete a region")
async def delete_region(region_id: int, current_admin: AdminUser):
    await service.delete_region(region_id)
    return {"message": "Region deleted successfully"}
