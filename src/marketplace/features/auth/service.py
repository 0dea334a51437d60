"""Business logic for authentication: registration, OTP verification, login and token refresh."""
import logging
from typing import Optional

from ...core.errors import InternalError, NotFound, Unauthenticated, ValidationFailed
from ..regions.models import Region
from . import models, otp, schemas
from . import security as auth_security
from .notifications import OtpSender

logger = logging.getLogger(__name__)

REGISTERED_MESSAGE = "Otp sent to your email"
VERIFIED_MESSAGE = "Verified"
NOT_VERIFIED_MESSAGE = "Your account is not verified please verify"


async def get_user_by_id(user_id: int) -> Optional[models.User]:
    """Retrieves a user by primary key, or None."""
    return await models.User.get_or_none(id=user_id)


async def get_user_by_email(email: str) -> Optional[models.User]:
    """Retrieves a user by their email address.

    Args:
        email: The email address of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    user = await models.User.get_or_none(email=email)
    return user


async def ensure_region_exists(region_id: int) -> Region:
    region = await Region.get_or_none(id=region_id)
    if not region:
        raise NotFound(f"Region {region_id} not found")
    return region


async def register_user(user_in: schemas.RegisterRequest) -> Optional[tuple[models.User, str]]:
    """Creates (or refreshes) a pending account and returns it with a fresh OTP.

    Registration never reveals whether an email is taken. An existing pending
    account keeps its stored details and password and is only sent a new code;
    an existing active account is left as it is and ``None`` is returned,
    meaning nothing should be sent.

    Args:
        user_in: The validated registration payload.

    Returns:
        ``(user, code)`` when a code must be delivered, otherwise None.
    """
    await ensure_region_exists(user_in.region_id)

    existing = await get_user_by_email(user_in.email)
    if existing:
        if existing.status == models.UserStatus.ACTIVE:
            logger.info(f"Registration attempt for already active account {existing.id}")
            return None
        # Stored details and password are kept.
        logger.info(f"Pending user {existing.id} re-registered, resending code")
        return existing, otp.generate(existing.email)

    user_data = user_in.model_dump(exclude={"password"})
    try:
        user = await models.User.create(
            **user_data,
            hashed_password=auth_security.get_password_hash(user_in.password),
            status=models.UserStatus.PENDING,
        )
    except Exception as e:
        logger.error(f"Register user failed: {e}", exc_info=True)
        raise InternalError("Could not create user.")
    logger.info(f"New user registered - {user}")

    return user, otp.generate(user.email)


def deliver_otp(sender: OtpSender, recipient: str, code: str) -> None:
    sender.send(recipient, code)


async def verify_user(verify_in: schemas.VerifyRequest) -> models.User:
    user = await get_user_by_email(verify_in.email)
    if not user:
        raise NotFound("User not found")
    if not otp.verify(user.email, verify_in.otp):
        raise ValidationFailed("Code is not valid or expired")
    if user.status != models.UserStatus.ACTIVE:
        user.status = models.UserStatus.ACTIVE
        await user.save(update_fields=["status", "updated_at"])
    logger.info(f"User verified - {user}")
    return user


async def login(login_in: schemas.LoginRequest) -> schemas.LoginResponse:
    """Checks credentials and issues a token pair.

    Pending accounts get a 200 with a message and no tokens.
    """
    user = await get_user_by_email(login_in.email)
    if not user:
        raise ValidationFailed("User not found")
    if not auth_security.verify_password(login_in.password, user.hashed_password):
        raise Unauthenticated("Password is incorrect")
    if user.status == models.UserStatus.PENDING:
        return schemas.LoginResponse(message=NOT_VERIFIED_MESSAGE)

    logger.info(f"User logged in - {user}")
    return schemas.LoginResponse(
        access_token=auth_security.create_access_token(user),
        refresh_token=auth_security.create_refresh_token(user),
        token_type="bearer",
    )


async def refresh_access_token(refresh_in: schemas.RefreshRequest) -> schemas.AccessTokenResponse:
    user_id = auth_security.decode_refresh_token(refresh_in.refresh_token)
    # Re-read the row so the new access token carries the current role and status.
    user = await get_user_by_id(user_id)
    if not user:
        logger.warning(f"Refresh token for missing user {user_id}")
        raise Unauthenticated("Invalid refresh token")
    logger.info(f"User {user.id} got new access_token")
    return schemas.AccessTokenResponse(access_token=auth_security.create_access_token(user))
