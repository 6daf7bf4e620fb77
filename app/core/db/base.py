from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from app.core.config import settings
from app.core.logging import get_logger

from typing import AsyncIterator


Base = declarative_base()


connection_string = str(settings.postgres.connection_string)

engine = create_async_engine(
    connection_string,
    echo=settings.app.is_testing is True,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    expire_on_commit=False,
)


logger = get_logger(__name__)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session rolled back due to error: {e}")
            raise


async def create_all() -> None:
    """Create any missing tables. Schema evolution beyond that is out of scope."""
    # Register every table on Base.metadata
    from app.core.db import schemas  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
