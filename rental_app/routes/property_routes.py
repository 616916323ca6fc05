import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi_utils.cbv import cbv
from sqlalchemy.ext.asyncio import AsyncSession

from core.get_current_user import get_current_user
from core.get_db import get_db_async
from core.safe_handler import safe_handler
from models.enums import PetPolicy, PropertyStatus, PropertyTypes
from models.models import User
from schemas.schema import (
    PropertyCreate,
    PropertyEnvelope,
    PropertyFilters,
    PropertyListOut,
    PropertyUpdate,
    SuccessOut,
)
from services.property_service import PropertyService

router = APIRouter(tags=["Property Management"])


@cbv(router=router)
class PropertyRoutes:
    @router.get("/properties", response_model=PropertyListOut)
    @safe_handler
    async def list_properties(
        self,
        request: Request,
        db: AsyncSession = Depends(get_db_async),
        city: Optional[str] = None,
        min_price: Optional[float] = Query(None, alias="minPrice"),
        max_price: Optional[float] = Query(None, alias="maxPrice"),
        bedrooms: Optional[int] = None,
        bathrooms: Optional[float] = None,
        property_type: Optional[PropertyTypes] = Query(None, alias="propertyType"),
        pet_policy: Optional[PetPolicy] = Query(None, alias="petPolicy"),
        status: PropertyStatus = PropertyStatus.AVAILABLE,
        page: int = 1,
        limit: Optional[int] = None,
    ):
        filters = PropertyFilters(
            city=city,
            min_price=min_price,
            max_price=max_price,
            bedrooms=bedrooms,
            bathrooms=bathrooms,
            property_type=property_type,
            pet_policy=pet_policy,
            status=status,
        )
        return await PropertyService(db).list_properties(
            filters=filters, page=page, limit=limit
        )

    @router.get("/properties/{property_id}", response_model=PropertyEnvelope)
    @safe_handler
    async def get_property(
        self,
        request: Request,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
    ):
        return await PropertyService(db).get_property(property_id=property_id)

    @router.post("/properties", response_model=PropertyEnvelope, status_code=201)
    @safe_handler
    async def create(
        self,
        request: Request,
        data: PropertyCreate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await PropertyService(db).create_property(
            current_user=current_user, data=data
        )

    @router.put("/properties/{property_id}", response_model=PropertyEnvelope)
    @safe_handler
    async def update(
        self,
        request: Request,
        property_id: uuid.UUID,
        data: PropertyUpdate,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await PropertyService(db).update_property(
            property_id=property_id, current_user=current_user, data=data
        )

    @router.delete("/properties/{property_id}", response_model=SuccessOut)
    @safe_handler
    async def delete_property(
        self,
        request: Request,
        property_id: uuid.UUID,
        db: AsyncSession = Depends(get_db_async),
        current_user: User = Depends(get_current_user),
    ):
        return await PropertyService(db).delete_property(
            property_id=property_id, current_user=current_user
        )
