"""Dependencies: database session and authenticated user"""
from typing import AsyncGenerator, Optional

import jwt
from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.constants import Role, Status
from orderdesk.core.errors import ApiError
from orderdesk.core.logging_config import get_logger
from orderdesk.core.messages import AuthMessages
from orderdesk.core.security import decode_access_token
from orderdesk.db.session import SessionLocal

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session per request
    """
    async with SessionLocal() as session:
        yield session


class CurrentUser(BaseModel):
    """Identity decoded from the bearer token"""
    user_id: int
    email: str
    role: str
    customer_id: Optional[int] = None
    lookup_code: Optional[str] = None
    status: int = Status.ACTIVE

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_client(self) -> bool:
        return self.role == Role.CLIENT

    @property
    def scope_customer_id(self) -> Optional[int]:
        """Customer filter for scoped queries; ``None`` means unrestricted"""
        return None if self.is_admin else self.customer_id


def _unauthorized(message: str) -> ApiError:
    return ApiError(
        status.HTTP_401_UNAUTHORIZED,
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise _unauthorized(AuthMessages.TOKEN_REQUIRED)

    try:
        payload = decode_access_token(credentials.credentials)
        user = CurrentUser(
            user_id=payload["userId"],
            email=payload["email"],
            role=payload["role"],
            customer_id=payload.get("customerId"),
            lookup_code=payload.get("lookupCode"),
            status=payload.get("status", Status.ACTIVE),
        )
    except (jwt.PyJWTError, KeyError, ValueError) as e:
        logger.warning(f"Rejected token: {e}")
        raise _unauthorized(AuthMessages.INVALID_TOKEN)

    if user.status != Status.ACTIVE:
        raise ApiError(status.HTTP_403_FORBIDDEN, AuthMessages.USER_INACTIVE)
    return user


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_admin:
        raise ApiError(status.HTTP_403_FORBIDDEN, AuthMessages.ADMIN_REQUIRED)
    return current_user


async def require_client(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_client:
        raise ApiError(status.HTTP_403_FORBIDDEN, AuthMessages.CLIENT_ONLY)
    return current_user


async def require_customer(current_user: CurrentUser = Depends(require_client)) -> CurrentUser:
    """Client that is linked to a customer"""
    if current_user.customer_id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, AuthMessages.NO_CUSTOMER)
    return current_user
