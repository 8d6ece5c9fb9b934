"""Process-wide database manager, the FastAPI session dependency and the app lifespan."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

import fastapi
from sqlalchemy.ext.asyncio import AsyncSession

from components.core import config
from components.core.database import DatabaseManager
from components.core.logging_config import get_logger
# Models must be imported so their tables exist on Base.metadata
import components.budget.models
import components.plan.models
import components.account.models
import components.transaction.models
import components.installment.models
import components.goal.models

settings = config.get_settings()
logger = get_logger(__name__)
db_manager = DatabaseManager()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request."""
    async with db_manager.get_db() as session:
        yield session


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI) -> AsyncIterator[None]:
    """Create missing tables when configured, and release the pool on shutdown."""
    if settings.DB_CREATE_TABLES:
        await db_manager.create_all()
        logger.info("Created missing database tables")
    yield
    await db_manager.engine.dispose()
