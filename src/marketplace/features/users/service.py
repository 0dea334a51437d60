"""Administrative user management: listing, creation, updates and deletion."""
import logging
from typing import List, Optional

from tortoise.exceptions import IntegrityError

from ...common.pagination import Page
from ...core.errors import Conflict, InternalError, NotFound, ValidationFailed
from ..auth.models import Role, User, UserStatus
from ..auth.schemas import UserResponse
from ..auth.security import get_password_hash
from ..auth.service import ensure_region_exists, get_user_by_email
from .schemas import UserCreate, UserUpdate, UserWithRegionResponse

logger = logging.getLogger(__name__)


def _to_user_response(user: User) -> UserResponse:
    return UserResponse.model_validate(user)


def _to_user_with_region_response(user: User) -> UserWithRegionResponse:
    """Expects ``region`` to be prefetched."""
    data = UserResponse.model_validate(user).model_dump()
    return UserWithRegionResponse(**data, region_name=user.region.name if user.region else None)


async def _get_user_or_404(user_id: int) -> User:
    user = await User.get_or_none(id=user_id)
    if not user:
        raise NotFound("User not found")
    return user


async def list_users(page: Page, region_id: Optional[int] = None) -> List[UserWithRegionResponse]:
    """
    Lists users with their region, optionally restricted to one region.

    Args:
        page: Row window resolved from the ``limit``/``offset`` query.
        region_id: The ID of the region to filter by.

    Returns:
        The users on the requested page; empty when nothing matches.
    """
    query = User.all()
    if region_id is not None:
        query = query.filter(region_id=region_id)
    users = await query.order_by("id").offset(page.skip).limit(page.limit).prefetch_related("region")
    logger.info(f"Admin fetched users (region={region_id})")
    return [_to_user_with_region_response(u) for u in users]


async def get_user(user_id: int) -> UserResponse:
    return _to_user_response(await _get_user_or_404(user_id))


async def create_user(user_in: UserCreate) -> UserResponse:
    """
    Creates an already active user.

    Args:
        user_in: Registration fields plus the role to grant.

    Returns:
        The created user.
    """
    if await get_user_by_email(user_in.email):
        raise Conflict("Email already registered")
    await ensure_region_exists(user_in.region_id)

    user_data = user_in.model_dump(exclude={"password"})
    try:
        user = await User.create(
            **user_data,
            hashed_password=get_password_hash(user_in.password),
            status=UserStatus.ACTIVE,
        )
    except IntegrityError:
        raise Conflict("Email already registered")
    except Exception as e:
        logger.error(f"Error in creating user: {e}", exc_info=True)
        raise InternalError("Error in creating user")
    logger.info(f"Admin created a new user {user.id}")
    return _to_user_response(user)


async def update_user(user_id: int, user_in: UserUpdate) -> UserResponse:
    user = await _get_user_or_404(user_id)
    update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise ValidationFailed("No fields for update")

    if "email" in update_data and update_data["email"] != user.email:
        if await User.filter(email=update_data["email"]).exists():
            raise Conflict("Email already registered")
    if "region_id" in update_data:
        await ensure_region_exists(update_data["region_id"])
    if "password" in update_data:
        update_data["hashed_password"] = get_password_hash(update_data.pop("password"))

    user.update_from_dict(update_data)
    try:
        await user.save()
    except IntegrityError:
        raise Conflict("Email already registered")
    except Exception as e:
        logger.error(f"Error in updating user: {e}", exc_info=True)
        raise InternalError("Error in updating user")
    logger.info(f"Admin updated user {user_id}")
    return _to_user_response(user)


async def delete_user(user_id: int) -> None:
    """Deletes a user together with their products, comments and orders."""
    user = await _get_user_or_404(user_id)
    await user.delete()
    logger.info(f"Admin deleted user {user_id}")


async def set_user_role(email: str, role: Role) -> User:
    """Used by the CLI to grant admin or seller rights."""
    user = await get_user_by_email(email)
    if not user:
        raise NotFound(f"User with email '{email}' not found")
    user.role = role
    await user.save(update_fields=["role", "updated_at"])
    logger.info(f"User {user.id} role set to {role.value}")
    return user


async def activate_user(email: str) -> User:
    """Marks an account verified without an OTP. Used by the CLI."""
    user = await get_user_by_email(email)
    if not user:
        raise NotFound(f"User with email '{email}' not found")
    user.status = UserStatus.ACTIVE
    await user.save(update_fields=["status", "updated_at"])
    logger.info(f"User {user.id} activated")
    return user
