"""
This module contains the database session.
"""
import sys
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from app.config import get_settings

logger = logging.getLogger(__name__)

try:
    settings = get_settings()
except Exception as e:
    print("Failed to load settings:", e, file=sys.stderr)
    logger.error("Failed to load settings:", exc_info=e)
    settings = None


def build_engine(database_url: str):
    """
    Create an async engine for the database.

    Pool sizing and server timeouts only apply to PostgreSQL; SQLite gets
    the driver defaults.
    """
    if database_url.startswith("postgresql"):
        return create_async_engine(
            database_url,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=1800,
            connect_args={
                "command_timeout": 60,
                "server_settings": {
                    "statement_timeout": "60000",  # 60 seconds
                    "idle_in_transaction_session_timeout": "60000"
                }
            }
        )
    return create_async_engine(database_url)


engine = None
async_session = None

if settings:
    try:
        engine = build_engine(settings.database_url)
        async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    except Exception as e:
        print("Failed to create database engine:", e, file=sys.stderr)
        logger.error("Failed to create database engine:", exc_info=e)


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Scope a unit of work: commit when the block exits cleanly, roll back on
    any exception and re-raise it.
    """
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise
