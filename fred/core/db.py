# fred/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from fred.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)

Base = declarative_base()


def _postgres_options() -> tuple[dict, dict]:
    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    connect_args = {
        "ssl": ssl_ctx,
        # asyncpg behind a transaction pooler cannot reuse prepared statements
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }
    pool_args = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }
    return connect_args, pool_args


def _enable_sqlite_foreign_keys(dbapi_connection, _):
    # rental links and audit columns rely on FK enforcement
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, db_type: str) -> AsyncEngine:
    """Engine for either backend FRED runs on (postgres in prod, sqlite locally)."""
    connect_args, pool_args = {}, {}
    if db_type == "postgres":
        connect_args, pool_args = _postgres_options()
    elif db_type == "sqlite":
        connect_args = {"check_same_thread": False}

    engine = create_async_engine(
        url,
        echo=False,
        echo_pool=DB_ECHO_POOL,
        connect_args=connect_args,
        **pool_args,
    )

    if db_type == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(DATABASE_URL, DB_TYPE)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


import fred.models  # noqa: E402,F401


async def init_models():
    """Create tables directly; migrations own the schema everywhere but development."""
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
