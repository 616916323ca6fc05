import uuid
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.models import Application, Conversation, Property


class PropertyRepo:
    def __init__(self, db):
        self.db = db

    async def get_by_id(self, property_id: uuid.UUID) -> Optional[Property]:
        result = await self.db.execute(
            select(Property).where(Property.id == property_id)
        )
        return result.scalar_one_or_none()

    async def get_property_with_relations(
        self, property_id: uuid.UUID
    ) -> Optional[Property]:
        result = await self.db.execute(
            select(Property)
            .options(selectinload(Property.owner))
            .where(Property.id == property_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    def _filter_conditions(self, filters) -> list:
        conditions = [Property.status == filters.status]
        if filters.city:
            conditions.append(Property.city.ilike(f"%{filters.city.strip()}%"))
        if filters.min_price is not None:
            conditions.append(Property.price >= filters.min_price)
        if filters.max_price is not None:
            conditions.append(Property.price <= filters.max_price)
        if filters.bedrooms is not None:
            conditions.append(Property.bedrooms >= filters.bedrooms)
        if filters.bathrooms is not None:
            conditions.append(Property.bathrooms >= filters.bathrooms)
        if filters.property_type is not None:
            conditions.append(Property.property_type == filters.property_type)
        if filters.pet_policy is not None:
            conditions.append(Property.pet_policy == filters.pet_policy)
        return conditions

    async def list_filtered(
        self, filters, offset: int, limit: int
    ) -> tuple[List[Property], int]:
        conditions = self._filter_conditions(filters)

        total = await self.db.scalar(
            select(func.count(Property.id)).where(*conditions)
        )
        result = await self.db.execute(
            select(Property)
            .options(selectinload(Property.owner))
            .where(*conditions)
            .order_by(Property.created_at.desc(), Property.id)
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def list_ids_for_owner(self, owner_id: uuid.UUID) -> List[uuid.UUID]:
        result = await self.db.execute(
            select(Property.id).where(Property.owner_id == owner_id)
        )
        return list(result.scalars().all())

    async def create(self, owner_id: uuid.UUID, **fields) -> Property:
        new_property = Property(owner_id=owner_id, **fields)
        self.db.add(new_property)
        try:
            await self.db.commit()
            await self.db.refresh(new_property)
            return new_property
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def update(self, prop: Property, **fields) -> Property:
        for key, value in fields.items():
            setattr(prop, key, value)
        self.db.add(prop)
        try:
            await self.db.commit()
            await self.db.refresh(prop)
            return prop
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def delete(self, prop: Property) -> None:
        try:
            await self.db.execute(
                delete(Application).where(Application.property_id == prop.id)
            )
            await self.db.execute(
                update(Conversation)
                .where(Conversation.property_id == prop.id)
                .values(property_id=None)
            )
            await self.db.execute(delete(Property).where(Property.id == prop.id))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
