"""User profile endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.errors import CONFLICT_RESPONSE, UNAUTHORIZED_RESPONSE, VALIDATION_RESPONSE
from schemas.user import UserResponse, UserUpdate
from services import user_service

router = APIRouter(prefix="/users", tags=["users"], responses=UNAUTHORIZED_RESPONSE)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current authenticated user's info."""
    return current_user


@router.patch(
    "",
    response_model=UserResponse,
    responses={**VALIDATION_RESPONSE, **CONFLICT_RESPONSE},
)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """Edit the current user's profile. Only fields present in the body change."""
    user = await user_service.update_user(db, current_user, data)
    return UserResponse.model_validate(user)
