import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from repos.auth_repo import AuthRepo

from .date_helper import utcnow
from .get_db import AsyncSessionLocal, Base, async_engine
from .settings import settings

logger = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")

    if settings.CREATE_TABLES_ON_STARTUP:
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured.")

    try:
        async with AsyncSessionLocal() as db:
            cutoff = utcnow() - timedelta(days=settings.BLACKLIST_RETENTION_DAYS)
            await AuthRepo(db).delete_expired_blacklisted_tokens(cutoff)
            logger.info("Blacklisted tokens cleanup completed.")
    except Exception:
        logger.exception("Failed to clean up blacklisted tokens")

    logger.info("Application startup complete.")

    yield

    await async_engine.dispose()
    logger.info("Database engine disposed.")
