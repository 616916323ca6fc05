import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_user
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from models.models import User
from schemas.schema import (
    ApplicationCreate,
    ApplicationEnvelope,
    ApplicationListOut,
    ApplicationStatusUpdate,
)
from services.application_service import ApplicationService

router = APIRouter(tags=["Rental Applications"])


@cbv(router)
class ApplicationRoutes:
    @router.get("/applications", response_model=ApplicationListOut)
    @safe_handler
    async def list_applications(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
        status: Optional[str] = None,
        property_id: Optional[uuid.UUID] = Query(None, alias="propertyId"),
    ):
        return await ApplicationService(db).list_applications(
            current_user=current_user, status=status, property_id=property_id
        )

    @router.post(
        "/applications", response_model=ApplicationEnvelope, status_code=201
    )
    @safe_handler
    async def submit(
        self,
        request: Request,
        data: ApplicationCreate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await ApplicationService(db).submit(current_user=current_user, data=data)

    @router.get(
        "/applications/{application_id}", response_model=ApplicationEnvelope
    )
    @safe_handler
    async def get_application(
        self,
        request: Request,
        application_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await ApplicationService(db).get_application(
            application_id=application_id, current_user=current_user
        )

    @router.patch(
        "/applications/{application_id}", response_model=ApplicationEnvelope
    )
    @safe_handler
    async def update_status(
        self,
        request: Request,
        application_id: uuid.UUID,
        data: ApplicationStatusUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await ApplicationService(db).update_status(
            application_id=application_id,
            current_user=current_user,
            status=data.status,
        )
