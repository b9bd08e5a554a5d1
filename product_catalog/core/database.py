from typing import AsyncIterator
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from product_catalog.core.config import settings
import logging
from sqlalchemy import event

logger = logging.getLogger(__name__)


def build_engine(database_url: str = settings.database_url) -> AsyncEngine:
    engine_kwargs = {
        "echo": settings.log_level == "DEBUG",
        "future": True,
    }
    # SQLite (in particular :memory:) runs on a single-connection pool
    if not database_url.startswith("sqlite"):
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    new_engine = create_async_engine(database_url, **engine_kwargs)

    if database_url.startswith("postgresql"):
        # Set search_path to the schema from settings after connecting
        @event.listens_for(new_engine.sync_engine, "connect")
        def set_search_path(dbapi_connection, connection_record):
            logger.info("Setting search path to %s", settings.db_schema)
            cursor = dbapi_connection.cursor()
            cursor.execute(f"SET search_path TO {settings.db_schema}")
            cursor.close()

    return new_engine


engine: AsyncEngine = build_engine()

async_session_maker = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_async_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency for getting database session"""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {type(e).__name__}: {e}")
            raise
        finally:
            await session.close()


async def create_db_and_tables(target: AsyncEngine = engine):
    logger.info("Creating database tables")
    # Register table models with the metadata before create_all
    import product_catalog.models  # noqa: F401

    async with target.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db(target: AsyncEngine = engine):
    await target.dispose()
