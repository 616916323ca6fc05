import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.models import NotificationPreference, User


class UserProfileRepo:
    def __init__(self, db):
        self.db = db

    async def update_user(self, user: User, **fields) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.add(user)
        try:
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def get_preferences(
        self, user_id: uuid.UUID
    ) -> NotificationPreference | None:
        result = await self.db.execute(
            select(NotificationPreference).where(
                NotificationPreference.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def get_or_create_preferences(
        self, user_id: uuid.UUID
    ) -> NotificationPreference:
        prefs = await self.get_preferences(user_id)
        if prefs:
            return prefs

        prefs = NotificationPreference(user_id=user_id)
        self.db.add(prefs)
        try:
            await self.db.commit()
            await self.db.refresh(prefs)
            return prefs
        except IntegrityError:
            await self.db.rollback()
            existing = await self.get_preferences(user_id)
            if existing is None:
                raise
            return existing

    async def update_preferences(
        self, prefs: NotificationPreference, **fields
    ) -> NotificationPreference:
        for key, value in fields.items():
            setattr(prefs, key, value)
        self.db.add(prefs)
        try:
            await self.db.commit()
            await self.db.refresh(prefs)
            return prefs
        except SQLAlchemyError:
            await self.db.rollback()
            raise
