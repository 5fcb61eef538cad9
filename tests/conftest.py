"""测试配置和 fixtures."""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from feedreader.core.gate import set_gate
from feedreader.core.seeder import Seeder
from feedreader.main import app
from feedreader.models.database import close_db, init_db


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """创建测试用的内存数据库会话工厂."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """创建测试用的空库会话."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded_session(async_session: AsyncSession) -> AsyncSession:
    """写入默认初始数据后的会话."""
    await Seeder().run(async_session)
    return async_session


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """创建测试用的 HTTP 客户端（全新内存库，尚未写入初始数据）."""
    set_gate(None)
    await init_db("sqlite+aiosqlite:///:memory:")

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await close_db()
    set_gate(None)
