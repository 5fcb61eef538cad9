"""数据库初始化和会话管理."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

# 全局引擎和会话工厂
_engine: Any = None
_session_factory: async_sessionmaker[AsyncSession] | None = None
# 内存库所有会话共享同一连接，会话期间独占
_store_lock: asyncio.Lock | None = None


def _is_memory_url(database_url: str) -> bool:
    return database_url.startswith("sqlite") and (
        ":memory:" in database_url or database_url.endswith("://")
    )


async def init_db(database_url: str) -> None:
    """初始化数据库，创建所有表.

    重新初始化会丢弃之前的引擎，并重置访问网关，使下一次操作重新写入初始数据。
    """
    from feedreader.core.gate import get_gate

    global _engine, _session_factory, _store_lock

    if _engine is not None:
        await _engine.dispose()

    _store_lock = None
    engine_kwargs: dict[str, Any] = {"echo": False}
    if _is_memory_url(database_url):
        # 内存库只存在于单个连接中，所有会话共享同一连接
        engine_kwargs["poolclass"] = StaticPool
        _store_lock = asyncio.Lock()

    _engine = create_async_engine(database_url, **engine_kwargs)
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    get_gate().reset()
    logger.info(f"数据库已初始化: {database_url}")


async def close_db() -> None:
    """释放数据库引擎."""
    global _engine, _session_factory, _store_lock

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
    _store_lock = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """获取数据库会话（用于依赖注入）."""
    if _session_factory is None:
        msg = "数据库未初始化，请先调用 init_db()"
        raise RuntimeError(msg)

    if _store_lock is None:
        async with _session_factory() as session:
            yield session
        return

    async with _store_lock, _session_factory() as session:
        yield session


def async_session_maker() -> async_sessionmaker[AsyncSession]:
    """获取会话工厂（用于后台任务）."""
    if _session_factory is None:
        msg = "数据库未初始化，请先调用 init_db()"
        raise RuntimeError(msg)
    return _session_factory
