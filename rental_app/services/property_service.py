import logging
import uuid

from fastapi import HTTPException

from core.check_permission import CheckRolePermission
from core.mapper import ORMMapper
from core.paginate import PaginatePage
from core.settings import settings
from repos.property_repo import PropertyRepo
from schemas.schema import (
    PropertyDetailOut,
    PropertyEnvelope,
    PropertyListOut,
    PropertyOut,
    SuccessOut,
)

logger = logging.getLogger(__name__)


class PropertyService:
    def __init__(self, db):
        self.repo: PropertyRepo = PropertyRepo(db)
        self.paginate: PaginatePage = PaginatePage()
        self.permission: CheckRolePermission = CheckRolePermission()
        self.mapper: ORMMapper = ORMMapper()

    async def check_owner(self, property_id: uuid.UUID, user_id: uuid.UUID, detail: str):
        prop = await self.repo.get_by_id(property_id)
        if not prop:
            raise HTTPException(404, "Property not found")

        if prop.owner_id != user_id:
            raise HTTPException(403, detail)
        return prop

    async def _envelope(self, property_id: uuid.UUID) -> PropertyEnvelope:
        prop = await self.repo.get_property_with_relations(property_id)
        if not prop:
            raise HTTPException(404, "Property not found")
        return PropertyEnvelope(property=self.mapper.one(prop, PropertyDetailOut))

    async def list_properties(self, filters, page: int | None, limit: int | None):
        params = self.paginate.params(page, limit, settings.DEFAULT_PAGE_SIZE)
        items, total = await self.repo.list_filtered(
            filters, offset=params.offset, limit=params.limit
        )
        return PropertyListOut(
            properties=self.mapper.many(items, PropertyOut),
            pagination=self.paginate.meta(params, total),
        )

    async def get_property(self, property_id: uuid.UUID) -> PropertyEnvelope:
        return await self._envelope(property_id)

    async def create_property(self, current_user, data) -> PropertyEnvelope:
        await self.permission.check_can_list_properties(current_user)

        fields = data.model_dump(exclude={"address"})
        fields.update(data.address.model_dump())
        prop = await self.repo.create(owner_id=current_user.id, **fields)
        logger.info(f"Property {prop.id} listed by {current_user.id}")
        return await self._envelope(prop.id)

    async def update_property(
        self, property_id: uuid.UUID, current_user, data
    ) -> PropertyEnvelope:
        prop = await self.check_owner(
            property_id, current_user.id, "You can only update your own properties"
        )

        changes = data.model_dump(exclude_unset=True, exclude={"address"})
        # null leaves a column unchanged, except coordinates which may be cleared
        changes = {key: value for key, value in changes.items() if value is not None}
        if data.address is not None:
            for key, value in data.address.model_dump(exclude_unset=True).items():
                if value is not None or key in {"latitude", "longitude"}:
                    changes[key] = value

        if changes:
            await self.repo.update(prop, **changes)
        return await self._envelope(property_id)

    async def delete_property(self, property_id: uuid.UUID, current_user) -> SuccessOut:
        prop = await self.check_owner(
            property_id, current_user.id, "You can only delete your own properties"
        )
        await self.repo.delete(prop)
        logger.info(f"Property {property_id} deleted by {current_user.id}")
        return SuccessOut()
