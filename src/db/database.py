# src/db/database.py
from typing import AsyncGenerator
from fastapi import HTTPException
from sqlalchemy import Enum, event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from core.config import settings
from utils.logger import setup_logger

logger = setup_logger("DATABASE")


def _engine_options(url: str) -> dict:
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        options.update(
            pool_size=20,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=3600,
            connect_args={
                "server_settings": {
                    "jit": "off",
                    "application_name": "dental_telehealth",
                }
            },
        )
    return options


def enable_sqlite_foreign_keys(async_engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless the pragma is set per connection."""

    @event.listens_for(async_engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Process-wide engine; the connection pool lives as long as the process
engine = create_async_engine(
    settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL)
)

if settings.SQLITE_MODE:
    enable_sqlite_foreign_keys(engine)

# Async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Base class for models
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides one database session per request"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except HTTPException:
            await session.rollback()
            raise
        except Exception as exc:
            await session.rollback()
            logger.error(f"Database session error: {exc}", exc_info=True)
            raise


async def create_tables():
    """Create all tables that do not exist yet"""
    # Register every mapper on Base.metadata before create_all
    import models  # noqa: F401

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


async def check_db_connection() -> bool:
    """Check database connection health"""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


async def disconnect_db():
    """Dispose of the connection pool"""
    await engine.dispose()


def db_enum(enum_cls) -> Enum:
    """Enum column type that stores member values ("Pan Masala"), not names"""
    return Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        name=enum_cls.__name__.lower(),
    )
