import logging
import uuid

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from core.check_permission import CheckRolePermission
from core.mapper import ORMMapper
from core.sensitive_hash import SensitiveHash
from core.validate_enum import validate_enum
from models.enums import ApplicationStatus, Capability, PropertyStatus
from repos.application_repo import ApplicationRepo
from repos.property_repo import PropertyRepo
from schemas.schema import ApplicationEnvelope, ApplicationListOut, ApplicationOut

logger = logging.getLogger(__name__)

DUPLICATE_APPLICATION = "You have already applied for this property"


class ApplicationService:
    def __init__(self, db):
        self.repo: ApplicationRepo = ApplicationRepo(db)
        self.property_repo: PropertyRepo = PropertyRepo(db)
        self.permission: CheckRolePermission = CheckRolePermission()
        self.sensitive_hash: SensitiveHash = SensitiveHash()
        self.mapper: ORMMapper = ORMMapper()

    def _status(self, value) -> ApplicationStatus:
        try:
            return validate_enum(value, ApplicationStatus, field="status")
        except ValueError:
            raise HTTPException(400, "Invalid status")

    def _envelope(self, application) -> ApplicationEnvelope:
        return ApplicationEnvelope(
            application=self.mapper.one(application, ApplicationOut)
        )

    async def submit(self, current_user, data) -> ApplicationEnvelope:
        await self.permission.check_can_apply(current_user)

        prop = await self.property_repo.get_by_id(data.property_id)
        if not prop:
            raise HTTPException(404, "Property not found")
        if prop.status != PropertyStatus.AVAILABLE:
            raise HTTPException(400, "This property is no longer available")

        if await self.repo.get_for_property_and_applicant(prop.id, current_user.id):
            raise HTTPException(400, DUPLICATE_APPLICATION)

        personal = data.personal_info
        employment = data.employment
        history = data.rental_history
        try:
            application = await self.repo.create(
                property_id=prop.id,
                applicant_id=current_user.id,
                status=ApplicationStatus.PENDING,
                full_name=personal.full_name,
                date_of_birth=personal.date_of_birth,
                phone_number=personal.phone_number,
                ssn_hash=self.sensitive_hash.hash_ssn(personal.ssn),
                employer=employment.employer,
                position=employment.position,
                income=employment.income,
                employment_duration=employment.duration,
                current_address=history.current_address,
                landlord_name=history.landlord_name,
                landlord_phone=history.landlord_phone,
                monthly_rent=history.monthly_rent,
                rental_duration=history.duration,
                documents=list(data.documents),
            )
        except IntegrityError:
            raise HTTPException(400, DUPLICATE_APPLICATION)

        logger.info(f"Application {application.id} submitted for property {prop.id}")
        return self._envelope(application)

    async def list_applications(
        self,
        current_user,
        status: str | None = None,
        property_id: uuid.UUID | None = None,
    ) -> ApplicationListOut:
        status_filter = self._status(status) if status else None

        if self.permission.has(current_user, Capability.SUBMIT_APPLICATIONS):
            items = await self.repo.list_filtered(
                applicant_id=current_user.id,
                status=status_filter,
                property_id=property_id,
            )
        else:
            owned = await self.property_repo.list_ids_for_owner(current_user.id)
            if not owned:
                return ApplicationListOut(applications=[])
            items = await self.repo.list_filtered(
                property_ids=owned,
                status=status_filter,
                property_id=property_id,
            )

        return ApplicationListOut(
            applications=self.mapper.many(items, ApplicationOut)
        )

    async def get_application(
        self, application_id: uuid.UUID, current_user
    ) -> ApplicationEnvelope:
        application = await self.repo.get_by_id(application_id)
        if not application:
            raise HTTPException(404, "Application not found")

        is_applicant = application.applicant_id == current_user.id
        is_owner = application.property.owner_id == current_user.id
        if not (is_applicant or is_owner):
            raise HTTPException(403, "Not authorized")

        return self._envelope(application)

    async def update_status(
        self, application_id: uuid.UUID, current_user, status: str | None
    ) -> ApplicationEnvelope:
        application = await self.repo.get_by_id(application_id)
        if not application:
            raise HTTPException(404, "Application not found")

        if application.property.owner_id != current_user.id:
            raise HTTPException(
                403, "Only the property owner can update application status"
            )

        new_status = self._status(status)
        property_status = (
            PropertyStatus.PENDING if new_status == ApplicationStatus.APPROVED else None
        )
        application = await self.repo.set_status(
            application, new_status, property_status=property_status
        )
        logger.info(
            f"Application {application.id} moved to {new_status.value} "
            f"by {current_user.id}"
        )
        return self._envelope(application)
