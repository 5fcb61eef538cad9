"""测试访问网关的一次性初始化."""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from feedreader.core.gate import AccessGate, get_gate, set_gate
from feedreader.core.seeder import SeedData, Seeder, default_seed_data
from feedreader.core.service import ReadingService
from feedreader.exceptions import SeedFailure
from feedreader.models.feed import Feed


class CountingSeeder(Seeder):
    """记录调用次数，并在写入前让出事件循环."""

    def __init__(self, fail_times: int = 0) -> None:
        super().__init__()
        self.calls = 0
        self.fail_times = fail_times

    async def run(self, session: AsyncSession) -> int:
        self.calls += 1
        await asyncio.sleep(0.01)
        if self.calls <= self.fail_times:
            raise RuntimeError("disk full")
        return await super().run(session)


@pytest_asyncio.fixture
async def file_session_factory(
    tmp_path: Path,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """文件数据库，每个会话使用独立连接."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reader.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


class TestEnsureInitialized:
    """测试 AccessGate.ensure_initialized 方法."""

    async def test_first_call_seeds(self, async_session: AsyncSession) -> None:
        """首次调用写入初始数据."""
        seeder = CountingSeeder()
        gate = AccessGate(seeder)

        await gate.ensure_initialized(async_session)

        assert gate.initialized is True
        assert seeder.calls == 1
        stats = await ReadingService(async_session, gate).get_stats()
        assert stats.total == len(default_seed_data().articles)

    async def test_later_calls_are_noop(self, async_session: AsyncSession) -> None:
        """之后的调用不再运行 Seeder."""
        seeder = CountingSeeder()
        gate = AccessGate(seeder)
        service = ReadingService(async_session, gate)

        await service.get_all_articles()
        await service.get_all_feeds()
        await service.update_article_read_status("article-welcome", True)

        assert seeder.calls == 1
        assert gate.seed_runs == 1

    async def test_concurrent_first_access_seeds_once(
        self, file_session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """并发的首次访问只写入一次，且都能看到完整数据."""
        seeder = CountingSeeder()
        gate = AccessGate(seeder)
        expected = len(default_seed_data().articles)

        async with file_session_factory() as first, file_session_factory() as second:
            stats, articles = await asyncio.gather(
                ReadingService(first, gate).get_stats(),
                ReadingService(second, gate).get_all_articles(),
            )

        assert seeder.calls == 1
        assert gate.seed_runs == 1
        assert stats.total == expected
        assert len(articles) == expected

    async def test_failure_is_retryable(self, async_session: AsyncSession) -> None:
        """写入失败时保持未初始化，下一次调用重新写入."""
        seeder = CountingSeeder(fail_times=1)
        gate = AccessGate(seeder)
        service = ReadingService(async_session, gate)

        with pytest.raises(SeedFailure, match="disk full"):
            await service.get_stats()
        assert gate.initialized is False

        stats = await service.get_stats()

        assert gate.initialized is True
        assert seeder.calls == 2
        assert stats.total == len(default_seed_data().articles)

    async def test_invalid_seed_data_surfaces_seed_failure(
        self, async_session: AsyncSession
    ) -> None:
        """数据集不合法时抛出 SeedFailure."""
        bad = SeedData(feeds=[Feed(id="f-1", title="F", url="https://f", folder_id="ghost")])
        gate = AccessGate(Seeder(bad))

        with pytest.raises(SeedFailure) as exc_info:
            await gate.ensure_initialized(async_session)

        assert "ghost" in exc_info.value.reason
        assert gate.initialized is False

    async def test_reset_allows_reseeding(self, async_session: AsyncSession) -> None:
        """reset 后下一次调用会再次运行 Seeder."""
        seeder = CountingSeeder()
        gate = AccessGate(seeder)
        await gate.ensure_initialized(async_session)

        gate.reset()
        await gate.ensure_initialized(async_session)

        assert seeder.calls == 2
        assert gate.seed_runs == 1

    async def test_reset_keeps_waiters_on_same_lock(
        self, async_session: AsyncSession
    ) -> None:
        """初始化进行中调用 reset，之后的调用仍在同一把锁上排队，不会重复写入."""
        seeder = CountingSeeder()
        gate = AccessGate(seeder)

        first = asyncio.create_task(gate.ensure_initialized(async_session))
        await asyncio.sleep(0)
        gate.reset()
        second = asyncio.create_task(gate.ensure_initialized(async_session))
        await asyncio.gather(first, second)

        assert seeder.calls == 1
        assert gate.initialized is True


class TestProcessGate:
    """测试进程级网关."""

    def test_get_gate_returns_same_instance(self) -> None:
        """多次获取得到同一个网关."""
        set_gate(None)
        try:
            assert get_gate() is get_gate()
        finally:
            set_gate(None)
