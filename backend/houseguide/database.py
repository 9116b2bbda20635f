"""Async engine, session factory and schema bootstrap."""

import sqlalchemy.event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from houseguide.config import settings
from houseguide.models.base import Base

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)


if engine.dialect.name == "sqlite":

    @sqlalchemy.event.listens_for(engine.sync_engine, "connect")
    def _configure_sqlite(dbapi_conn, _connection_record):
        """WAL journal, busy timeout and foreign key enforcement."""
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models() -> None:
    """Create any missing tables. Existing tables are left untouched."""
    import houseguide.residents.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    async with async_session_factory() as session:
        yield session
