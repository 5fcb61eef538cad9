"""阅读服务 - 经过访问网关的对外操作."""

from sqlalchemy.ext.asyncio import AsyncSession

from feedreader.core import reading
from feedreader.core.gate import AccessGate, get_gate
from feedreader.models.schemas import (
    ArticleRead,
    FeedRead,
    FolderRead,
    ReadingData,
    Stats,
)


class ReadingService:
    """阅读服务.

    每个公开方法都先等待网关完成初始化，再执行对应的查询或修改。
    """

    def __init__(self, session: AsyncSession, gate: AccessGate | None = None) -> None:
        self.session = session
        self.gate = gate or get_gate()

    async def _ready(self) -> None:
        await self.gate.ensure_initialized(self.session)

    # 查询

    async def get_all_folders(self) -> list[FolderRead]:
        await self._ready()
        return await reading.get_all_folders(self.session)

    async def get_all_feeds(self) -> list[FeedRead]:
        await self._ready()
        return await reading.get_all_feeds(self.session)

    async def get_all_articles(self) -> list[ArticleRead]:
        await self._ready()
        return await reading.get_all_articles(self.session)

    async def get_stats(self) -> Stats:
        await self._ready()
        return await reading.get_stats(self.session)

    async def get_unread_articles(self) -> list[ArticleRead]:
        await self._ready()
        return await reading.get_unread_articles(self.session)

    async def get_starred_articles(self) -> list[ArticleRead]:
        await self._ready()
        return await reading.get_starred_articles(self.session)

    async def get_articles_by_feed(self, feed_id: str) -> list[ArticleRead]:
        await self._ready()
        return await reading.get_articles_by_feed(self.session, feed_id)

    async def get_articles_by_folder(self, folder_id: str) -> list[ArticleRead]:
        await self._ready()
        return await reading.get_articles_by_folder(self.session, folder_id)

    async def get_article(self, article_id: str) -> ArticleRead:
        await self._ready()
        return await reading.get_article(self.session, article_id)

    async def get_reading_data(self) -> ReadingData:
        await self._ready()
        return await reading.get_reading_data(self.session)

    # 修改

    async def update_article_read_status(self, article_id: str, read: bool) -> ArticleRead:
        await self._ready()
        return await reading.update_article_read_status(self.session, article_id, read)

    async def update_article_star_status(
        self, article_id: str, starred: bool
    ) -> ArticleRead:
        await self._ready()
        return await reading.update_article_star_status(self.session, article_id, starred)

    async def delete_article(self, article_id: str) -> None:
        await self._ready()
        await reading.delete_article(self.session, article_id)
