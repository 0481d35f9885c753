from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tenderbid.core.config import settings
from tenderbid.core.logging_config import logger
from tenderbid.services.errors import StorageFailure, StorageUnavailable

engine = create_async_engine(settings.DATABASE_URL, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def is_connection_error(exc: BaseException) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError, OSError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


@asynccontextmanager
async def transaction(session_factory: async_sessionmaker) -> AsyncIterator[AsyncSession]:
    """Одна операция - одна транзакция: коммит при успехе, откат при любой ошибке."""
    try:
        async with session_factory() as db:
            async with db.begin():
                yield db
    except (DBAPIError, OSError) as e:
        if is_connection_error(e):
            raise StorageUnavailable(f"Storage is unavailable: {e}") from e
        logger.error(f"Storage rejected the operation: {e}")
        raise StorageFailure(f"Storage rejected the operation: {type(e.orig).__name__}") from e
