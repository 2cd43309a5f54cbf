"""Authentication API"""
from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.core.deps import CurrentUser, get_current_user, get_db, require_admin
from orderdesk.schemas.auth import LoginRequest, LoginResponse, RegisterRequest, TokenResponse, UserResponse
from orderdesk.services.auth_service import AuthService
from orderdesk.services.result import unwrap

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    *,
    db: AsyncSession = Depends(get_db),
    body: LoginRequest,
) -> Any:
    """Exchange email and password for a token"""
    data = unwrap(await AuthService(db).login(body.email, body.password))
    return LoginResponse(token=data["token"], user=UserResponse.model_validate(data["user"]))


@router.get("/me", response_model=UserResponse)
async def read_me(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    return unwrap(await AuthService(db).get_user(current_user.user_id))


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    *,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
) -> Any:
    return unwrap(await AuthService(db).refresh(current_user.user_id))


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    *,
    db: AsyncSession = Depends(get_db),
    body: RegisterRequest,
    current_user: CurrentUser = Depends(require_admin),
) -> Any:
    """Create a user (admin only)"""
    return unwrap(await AuthService(db).register(body, created_by=current_user.user_id))
