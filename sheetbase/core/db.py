import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from sheetbase.core.config import settings

logger = logging.getLogger(__name__)

# Базовый класс для моделей
Base = declarative_base()


def _engine_options() -> dict:
    options = {
        "echo": settings.db_echo,
        # таймаут подключения - единственный таймаут в системе
        "connect_args": {"timeout": settings.db_connect_timeout},
    }
    if "sqlite" in settings.async_database_url:
        # соединения aiosqlite привязаны к своему event loop
        options["poolclass"] = NullPool
    return options


# Асинхронный движок
engine = create_async_engine(settings.async_database_url, **_engine_options())

# Сессии
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Сессия БД для dependency injection в FastAPI"""
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """Подключение к БД и создание таблиц при старте"""
    # импорт регистрирует модели в Base.metadata
    import sheetbase.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Connected to database, tables are ready")


async def drop_models() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    await engine.dispose()
