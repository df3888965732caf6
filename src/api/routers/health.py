"""Liveness endpoint reporting whether the accounts table is reachable."""
import logging
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

API_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Service status plus whether the users table could be queried."""

    status: Literal["ok", "degraded"]
    database: Literal["ok", "unavailable"]
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse:
    """
    Report service health.

    Selecting from `users` fails both when the database is down and when
    migrations have not been applied, so either shows up as degraded.
    """
    try:
        await db.execute(select(User.id).limit(1))
    except SQLAlchemyError:
        logger.exception("Health check could not query the users table")
        return HealthResponse(status="degraded", database="unavailable", version=API_VERSION)
    return HealthResponse(status="ok", database="ok", version=API_VERSION)
