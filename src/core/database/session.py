from collections.abc import AsyncGenerator
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.core.config import settings

if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is not set")


def _loggable_url(url: str) -> str:
    # Hide credentials in logs
    return "...@" + url.split("@")[1] if "@" in url else url[:30]


def engine_options(url: str) -> dict[str, Any]:
    """Pool and timeout options for create_async_engine; SQLite URLs get none."""
    if url.startswith("sqlite"):
        return {}
    options: dict[str, Any] = {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_pre_ping": True,
    }
    if url.startswith("postgresql+asyncpg") and settings.db_statement_timeout_ms > 0:
        options["connect_args"] = {
            "server_settings": {"statement_timeout": str(settings.db_statement_timeout_ms)}
        }
    return options


logger.info("Connecting to database {}", _loggable_url(settings.database_url))

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    future=True,
    **engine_options(settings.database_url),
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
