"""
This module contains the database dependencies.
"""
import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import session

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database session.
    """
    if session.async_session is None:
        raise RuntimeError("Database is not configured; set DATABASE_URL")

    db = session.async_session()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error("Database operation failed: %s", e)
        raise
    finally:
        try:
            await db.close()
        except Exception as e:
            logger.error("Failed to close DB session: %s", e)
