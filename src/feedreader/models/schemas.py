"""读取快照与统计模型.

查询层只返回这些模型的实例，而不是会话中的 ORM 对象，调用方修改它们
不会影响存储。
"""

from datetime import datetime

from pydantic import field_validator
from sqlmodel import SQLModel

from feedreader.models.article import ArticleBase, ensure_utc
from feedreader.models.feed import FeedBase
from feedreader.models.folder import FolderBase


class FolderRead(FolderBase):
    """文件夹快照."""

    id: str
    feed_ids: list[str] = []
    unread_count: int = 0


class FeedRead(FeedBase):
    """订阅源快照."""

    id: str
    unread_count: int = 0

    @field_validator("last_fetched")
    @classmethod
    def as_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)


class ArticleRead(ArticleBase):
    """文章快照."""

    id: str
    feed_title: str
    updated_at: datetime

    @field_validator("published_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime | None:
        return ensure_utc(value)


class FeedStats(SQLModel):
    """单个订阅源的统计."""

    feed_id: str
    total: int = 0
    unread: int = 0
    starred: int = 0


class Stats(SQLModel):
    """全部文章的统计（每次调用时重新计算）."""

    total: int = 0
    unread: int = 0
    starred: int = 0
    feeds: list[FeedStats] = []


class ReadingData(SQLModel):
    """阅读界面一次性加载的数据."""

    folders: list[FolderRead]
    feeds: list[FeedRead]
    articles: list[ArticleRead]
    stats: Stats
