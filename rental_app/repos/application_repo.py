import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from models.enums import ApplicationStatus, PropertyStatus
from models.models import Application


class ApplicationRepo:
    def __init__(self, db):
        self.db = db

    def _with_relations(self):
        return select(Application).options(
            selectinload(Application.property),
            selectinload(Application.applicant),
        )

    async def get_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        result = await self.db.execute(
            self._with_relations()
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_for_property_and_applicant(
        self, property_id: uuid.UUID, applicant_id: uuid.UUID
    ) -> Optional[Application]:
        result = await self.db.execute(
            select(Application).where(
                Application.property_id == property_id,
                Application.applicant_id == applicant_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, **fields) -> Application:
        application = Application(**fields)
        self.db.add(application)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        return await self.get_by_id(application.id)

    async def list_filtered(
        self,
        *,
        applicant_id: uuid.UUID | None = None,
        property_ids: List[uuid.UUID] | None = None,
        status: ApplicationStatus | None = None,
        property_id: uuid.UUID | None = None,
    ) -> List[Application]:
        stmt = self._with_relations()
        if applicant_id is not None:
            stmt = stmt.where(Application.applicant_id == applicant_id)
        if property_ids is not None:
            stmt = stmt.where(Application.property_id.in_(property_ids))
        if status is not None:
            stmt = stmt.where(Application.status == status)
        if property_id is not None:
            stmt = stmt.where(Application.property_id == property_id)

        result = await self.db.execute(
            stmt.order_by(Application.submitted_at.desc(), Application.id)
        )
        return list(result.scalars().all())

    async def set_status(
        self,
        application: Application,
        status: ApplicationStatus,
        property_status: PropertyStatus | None = None,
    ) -> Application:
        application.status = status
        if property_status is not None:
            application.property.status = property_status
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return await self.get_by_id(application.id)
