import uuid

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from models.models import User
from repos.auth_repo import AuthRepo

from .get_db import get_db_async
from .validators import get_request_token, jwt_protect


async def get_current_user(
    request: Request,
    user_id: uuid.UUID = Depends(jwt_protect),
    db: AsyncSession = Depends(get_db_async),
) -> User:
    repo = AuthRepo(db)
    if await repo.is_token_blacklisted(get_request_token(request)):
        raise HTTPException(status_code=401, detail="Token revoked")

    user = await repo.by_id(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")

    return user
