import logging
from typing import List

from tortoise.exceptions import IntegrityError

from ...common.pagination import Page
from ...core.errors import Conflict, InternalError, NotFound, ValidationFailed
from .models import Region
from .schemas import (
    RegionCreate,
    RegionResponse,
    RegionUpdate,
    RegionUserSummary,
    RegionWithUsersResponse,
)

logger = logging.getLogger(__name__)


def _to_region_response(region: Region) -> RegionResponse:
    return RegionResponse.model_validate(region)


def _to_region_with_users_response(region: Region) -> RegionWithUsersResponse:
    """Converts a Region with prefetched users to a RegionWithUsersResponse schema."""
    return RegionWithUsersResponse(
        id=region.id,
        name=region.name,
        users=[RegionUserSummary.model_validate(user) for user in region.users],
    )


async def _get_region_or_404(region_id: int) -> Region:
    region = await Region.get_or_none(id=region_id)
    if not region:
        raise NotFound("Region not found!")
    return region


async def create_region(region_in: RegionCreate) -> RegionResponse:
    """
    Creates a new region.

    Args:
        region_in: The data for the new region.

    Returns:
        The created region.
    """
    if await Region.filter(name=region_in.name).exists():
        raise Conflict("Region must be unique!")
    try:
        region = await Region.create(**region_in.model_dump())
    except IntegrityError:
        raise Conflict("Region must be unique!")
    except Exception as e:
        logger.error(f"Error creating region: {e}", exc_info=True)
        raise InternalError("Error in creating region")
    logger.info(f"Region created: {region}")
    return _to_region_response(region)


async def list_regions(page: Page) -> List[RegionWithUsersResponse]:
    """
    Lists regions together with the users registered in each.

    Args:
        page: Row window resolved from the ``limit``/``offset`` query.

    Returns:
        The regions on the requested page, possibly empty.
    """
    regions = (
        await Region.all()
        .order_by("id")
        .offset(page.skip)
        .limit(page.limit)
        .prefetch_related("users")
    )
    logger.info("Fetched all regions")
    return [_to_region_with_users_response(region) for region in regions]


async def get_region(region_id: int) -> RegionResponse:
    region = await _get_region_or_404(region_id)
    return _to_region_response(region)


async def update_region(region_id: int, region_in: RegionUpdate) -> RegionResponse:
    region = await _get_region_or_404(region_id)
    update_data = region_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No fields for update")

    new_name = update_data.get("name")
    if new_name and new_name != region.name and await Region.filter(name=new_name).exists():
        raise Conflict("Region must be unique!")

    region.update_from_dict(update_data)
    try:
        await region.save()
    except IntegrityError:
        raise Conflict("Region must be unique!")
    except Exception as e:
        logger.error(f"Error updating region: {e}", exc_info=True)
        raise InternalError("Error updating region")
    logger.info(f"Region updated: {region}")
    return _to_region_response(region)


async def delete_region(region_id: int) -> None:
    """
    Deletes a region. Its users, and everything they own, go with it.

    Args:
        region_id: The ID of the region to delete.
    """
    region = await _get_region_or_404(region_id)
    await region.delete()
    logger.info(f"Region deleted: {region_id}")
