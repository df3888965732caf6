"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.auth import AccessTokenResponse, AuthCredentials
from schemas.errors import CONFLICT_RESPONSE, UNAUTHORIZED_RESPONSE, VALIDATION_RESPONSE
from schemas.user import UserResponse
from services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**VALIDATION_RESPONSE, **CONFLICT_RESPONSE},
)
async def signup(
    credentials: AuthCredentials,
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Register a new account. Returns the public account fields."""
    user = await auth_service.signup(db, credentials)
    return UserResponse.model_validate(user)


@router.post(
    "/signin",
    response_model=AccessTokenResponse,
    status_code=status.HTTP_200_OK,
    responses={**VALIDATION_RESPONSE, **UNAUTHORIZED_RESPONSE},
)
async def signin(
    credentials: AuthCredentials,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> AccessTokenResponse:
    """Exchange email and password for a short-lived bearer token."""
    access_token = await auth_service.signin(db, credentials, settings)
    return AccessTokenResponse(access_token=access_token)
