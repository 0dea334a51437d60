"""API routes for registration, OTP verification, login and token refresh."""
import logging
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, status

from ...common.schemas import MessageResponse
from ...core.errors import NotFound
from . import schemas
from . import service as auth_service
from .notifications import OtpSender, get_otp_sender
from .security import CurrentUser

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Authentication"],
    prefix="/auth"
)


@router.post("/register", response_model=MessageResponse)
async def register_user(
    user_in: schemas.RegisterRequest,
    background_tasks: BackgroundTasks,
    sender: Annotated[OtpSender, Depends(get_otp_sender)],
):
    registered = await auth_service.register_user(user_in)
    if registered:
        user, code = registered
        background_tasks.add_task(auth_service.deliver_otp, sender, user.email, code)
    return {"message": auth_service.REGISTERED_MESSAGE}


@router.post("/verify", response_model=MessageResponse)
async def verify_user(verify_in: schemas.VerifyRequest):
    await auth_service.verify_user(verify_in)
    return {"message": auth_service.VERIFIED_MESSAGE}


@router.post("/login", response_model=schemas.LoginResponse, response_model_exclude_none=True)
async def login(login_in: schemas.LoginRequest):
    return await auth_service.login(login_in)


@router.post("/access-token", response_model=schemas.AccessTokenResponse)
async def refresh_access_token(refresh_in: schemas.RefreshRequest):
    return await auth_service.refresh_access_token(refresh_in)


@router.get("/{user_id}", response_model=schemas.UserResponse, status_code=status.HTTP_200_OK)
async def get_user(user_id: int, current_user: CurrentUser):
    user = await auth_service.get_user_by_id(user_id)
    if not user:
        raise NotFound("User not found")
    return schemas.UserResponse.model_validate(user)
