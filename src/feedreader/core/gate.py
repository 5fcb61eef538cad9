"""访问网关 - 保证初始数据在任何读写操作之前写入，且只写入一次."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from feedreader.core.seeder import Seeder
from feedreader.exceptions import SeedFailure

logger = logging.getLogger(__name__)


class AccessGate:
    """一次性初始化网关.

    首次调用 ensure_initialized() 时在锁内运行 Seeder，并发的首次调用者在锁上
    等待，拿到锁后看到的是已经写完的数据。写入失败时不会标记为已初始化，
    下一次调用会重新尝试。
    """

    def __init__(self, seeder: Seeder | None = None) -> None:
        self.seeder = seeder or Seeder()
        self.initialized = False
        self.seed_runs = 0
        self._lock = asyncio.Lock()

    async def ensure_initialized(self, session: AsyncSession) -> None:
        """确保已写入初始数据."""
        if self.initialized:
            return

        async with self._lock:
            if self.initialized:
                return

            logger.info("首次访问，正在写入初始数据...")
            self.seed_runs += 1
            try:
                await self.seeder.run(session)
            except Exception as e:
                logger.error(f"初始数据写入失败: {e}")
                raise SeedFailure(str(e)) from e

            self.initialized = True

    def reset(self) -> None:
        """重置为未初始化（数据库重建后调用）."""
        self.initialized = False
        self.seed_runs = 0


# 进程级网关
_gate: AccessGate | None = None


def get_gate() -> AccessGate:
    """获取进程级访问网关（懒加载）."""
    global _gate
    if _gate is None:
        _gate = AccessGate()
    return _gate


def set_gate(gate: AccessGate | None) -> None:
    """替换进程级访问网关."""
    global _gate
    _gate = gate
