"""Engine, session factory and insert helpers shared by every repository."""

from contextlib import asynccontextmanager
from typing import Any, Awaitable, Callable, AsyncContextManager, Iterable, Optional, Tuple, TypeVar, cast

from sqlalchemy import DateTime
from sqlalchemy.dialects import mysql
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from components.core import config
from components.core.exceptions import ConflictError
from components.core.logging_config import get_logger

settings = config.get_settings()
logger = get_logger(__name__)
Base = declarative_base()
SessionMaker = Callable[[], AsyncContextManager[AsyncSession]]
T = TypeVar("T")

# Microseconds are kept on MySQL, whose DATETIME defaults to whole seconds
PreciseDateTime = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")

POOL_OPTIONS = {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


class DatabaseManager:
    """Owns the async engine; tests pass their own in-memory engine."""

    def __init__(self, engine: Optional[AsyncEngine] = None) -> None:
        self.engine = engine or create_async_engine(settings.async_db_url, echo=settings.DEBUG, **POOL_OPTIONS)
        self._session_factory = cast(
            SessionMaker,
            sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            ),
        )

    @asynccontextmanager
    async def get_db(self) -> AsyncContextManager[AsyncSession]:
        """Open a session and close it when the block exits."""
        async with self._session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create every table registered on Base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def insert_or_fetch(
    session: AsyncSession,
    instance: T,
    fetch: Callable[[], Awaitable[Optional[T]]],
) -> Tuple[T, bool]:
    """
    Insert a row guarded by a unique constraint, or return the row that won.

    The instance (with any pending children) is committed as one unit. When the
    commit fails on the unique constraint the session is rolled back and
    ``fetch`` is used to read the concurrently created row.

    Returns:
        Tuple of the persisted row and whether this call created it.
    """
    session.add(instance)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        winner = await fetch()
        if winner is None:
            raise ConflictError(f"Could not insert or read back {type(instance).__name__}") from exc
        logger.warning(f"Lost insert race for {type(instance).__name__}, using existing row")
        return winner, False
    return instance, True


async def atomic_insert(session: AsyncSession, instances: Iterable[Any]) -> None:
    """Insert several rows in a single commit; nothing is persisted on failure."""
    session.add_all(list(instances))
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        raise
