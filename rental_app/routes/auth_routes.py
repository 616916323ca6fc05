from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_user
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from schemas.schema import RefreshTokenInput, UserCreate, UserLoginInput
from services.auth_service import AuthService

router = APIRouter(tags=["User Authentication"])


@cbv(router)
class UserRoutes:
    @router.post("/auth/register", status_code=201)
    @safe_handler
    async def register(
        self,
        request: Request,
        data: UserCreate,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).register(data)

    @router.post("/auth/login")
    @safe_handler
    async def login(
        self,
        request: Request,
        data: UserLoginInput,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).login(data)

    @router.post("/auth/refresh")
    @safe_handler
    async def refresh(
        self,
        request: Request,
        data: Optional[RefreshTokenInput] = None,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).refresh(request, data)

    @router.post("/auth/logout", dependencies=[Depends(get_current_user)])
    @safe_handler
    async def logout(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await AuthService(db).logout(request)
