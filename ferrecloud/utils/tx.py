from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.core.errors import AppError, StorageError
from ferrecloud.core.logger import logger

@asynccontextmanager
async def maybe_begin(session: AsyncSession):
    """
    Si la sesión ya está en transacción, reutilízala.
    Si no, abre una transacción de contexto.
    """
    if session.in_transaction():
        yield
    else:
        async with session.begin():
            yield

@asynccontextmanager
async def unit_of_work(session: AsyncSession, operation: str):
    """
    Commit del bloque completo o rollback total.

    Los AppError se propagan tal cual; cualquier error de SQLAlchemy
    se convierte en StorageError.
    """
    if not session.in_transaction():
        await session.begin()
    try:
        yield
        await session.commit()
    except AppError:
        await session.rollback()
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("[UnitOfWork] %s failed: %s", operation, e, exc_info=True)
        raise StorageError(operation, str(e.__class__.__name__)) from e
    except Exception:
        await session.rollback()
        raise
