import logging
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from ...core.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ACCESS_TOKEN_SECRET,
    ALGORITHM,
    REFRESH_TOKEN_EXPIRE_DAYS,
    REFRESH_TOKEN_SECRET,
)
from ...core.errors import Forbidden, Unauthenticated, Unverified
from . import models, schemas

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')


def _encode(data: dict, secret: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def create_access_token(user: models.User, expires_delta: Optional[timedelta] = None) -> str:
    """Short-lived token carrying the identity, role and status the Auth Gate checks."""
    data = {
        "id": user.id,
        "role": user.role.value,
        "status": user.status.value,
        "type": ACCESS_TOKEN_TYPE,
    }
    return _encode(data, ACCESS_TOKEN_SECRET, expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user: models.User, expires_delta: Optional[timedelta] = None) -> str:
    """Long-lived token carrying only the user id, signed with its own secret."""
    data = {"id": user.id, "type": REFRESH_TOKEN_TYPE}
    return _encode(data, REFRESH_TOKEN_SECRET, expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def _decode(token: str, secret: str, expected_type: str) -> dict:
    # Every failure maps to the same client-facing error; the cause is only logged.
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.info(f"Rejected expired {expected_type} token")
        raise Unauthenticated("Invalid token")
    except JWTError as e:
        logger.warning(f"Rejected {expected_type} token: {e}")
        raise Unauthenticated("Invalid token")
    if payload.get("type") != expected_type:
        logger.warning(f"Rejected token of type {payload.get('type')!r}, expected {expected_type!r}")
        raise Unauthenticated("Invalid token")
    return payload


def decode_access_token(token: str) -> schemas.TokenClaims:
    payload = _decode(token, ACCESS_TOKEN_SECRET, ACCESS_TOKEN_TYPE)
    try:
        return schemas.TokenClaims.model_validate(payload)
    except ValidationError as e:
        logger.error(f"Token data validation error: {e}")
        raise Unauthenticated("Invalid token")


def decode_refresh_token(token: str) -> int:
    """Returns the user id carried by a valid refresh token."""
    payload = _decode(token, REFRESH_TOKEN_SECRET, REFRESH_TOKEN_TYPE)
    user_id = payload.get("id")
    if not isinstance(user_id, int):
        logger.warning("Refresh token id is missing.")
        raise Unauthenticated("Invalid token")
    return user_id


async def get_token_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> schemas.TokenClaims:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Token not provided")
    return decode_access_token(credentials.credentials)


async def get_current_user(
    claims: Annotated[schemas.TokenClaims, Depends(get_token_claims)],
) -> schemas.TokenClaims:
    if claims.status != models.UserStatus.ACTIVE:
        logger.warning(f"User {claims.id} is not verified.")
        raise Unverified()
    return claims


def require_roles(*roles: models.Role):
    """Builds a dependency admitting active users whose token role is in ``roles``."""
    allowed = frozenset(roles)

    async def dependency(
        current_user: Annotated[schemas.TokenClaims, Depends(get_current_user)],
    ) -> schemas.TokenClaims:
        if current_user.role not in allowed:
            raise Forbidden("Not allowed")
        return current_user

    return dependency


get_current_active_admin_user = require_roles(models.Role.ADMIN)
get_current_admin_or_seller = require_roles(models.Role.ADMIN, models.Role.SELLER)

CurrentUser = Annotated[schemas.TokenClaims, Depends(get_current_user)]
AdminUser = Annotated[schemas.TokenClaims, Depends(get_current_active_admin_user)]
AdminOrSeller = Annotated[schemas.TokenClaims, Depends(get_current_admin_or_seller)]
