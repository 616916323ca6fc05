from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_user
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from models.models import User
from schemas.schema import (
    NotificationPreferencesOut,
    NotificationPreferencesUpdate,
    ProfileOut,
    ProfileUpdate,
)
from services.profile_service import UserProfileService

router = APIRouter(tags=["User Profile"])


@cbv(router)
class UserProfileRoutes:
    @router.get("/profile", response_model=ProfileOut)
    @safe_handler
    async def get_profile(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await UserProfileService(db).get(current_user=current_user)

    @router.put("/profile", response_model=ProfileOut)
    @safe_handler
    async def update_profile(
        self,
        request: Request,
        data: ProfileUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await UserProfileService(db).update(current_user=current_user, data=data)

    @router.get("/profile/notifications", response_model=NotificationPreferencesOut)
    @safe_handler
    async def get_preferences(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await UserProfileService(db).get_preferences(current_user=current_user)

    @router.put("/profile/notifications", response_model=NotificationPreferencesOut)
    @safe_handler
    async def update_preferences(
        self,
        request: Request,
        data: NotificationPreferencesUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await UserProfileService(db).update_preferences(
            current_user=current_user, data=data
        )
