import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.models import BlacklistedToken, User


class AuthRepo:
    def __init__(self, db):
        self.db = db

    async def by_id(self, user_id: uuid.UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        email_payload = email.strip().lower()
        result = await self.db.execute(select(User).where(User.email == email_payload))
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.db.add(user)
        return await self._commit_and_refresh(user)

    async def _commit_and_refresh(self, user: User) -> User:
        try:
            await self.db.commit()
            await self.db.refresh(user)
            return user
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def blacklist_token(self, token: str):
        if await self.is_token_blacklisted(token):
            return
        self.db.add(BlacklistedToken(token=token))
        try:
            await self.db.commit()
        except IntegrityError:
            # revoked concurrently by another request
            await self.db.rollback()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def is_token_blacklisted(self, token: str | None) -> bool:
        if not token:
            return False
        result = await self.db.execute(
            select(BlacklistedToken.id).where(BlacklistedToken.token == token)
        )
        return result.scalar_one_or_none() is not None

    async def delete_expired_blacklisted_tokens(self, cutoff: datetime):
        try:
            await self.db.execute(
                delete(BlacklistedToken).where(BlacklistedToken.blacklisted_on < cutoff)
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
