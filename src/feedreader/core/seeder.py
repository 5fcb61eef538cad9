"""初始数据写入 - 首次访问时填充空库."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from feedreader.exceptions import SeedDataError
from feedreader.models.article import Article
from feedreader.models.feed import Feed
from feedreader.models.folder import Folder

logger = logging.getLogger(__name__)


@dataclass
class SeedData:
    """待写入的初始数据集."""

    folders: list[Folder] = field(default_factory=list)
    feeds: list[Feed] = field(default_factory=list)
    articles: list[Article] = field(default_factory=list)


def _check_unique(kind: str, ids: list[str]) -> set[str]:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise SeedDataError(f"重复的 {kind} ID: {item_id}")
        seen.add(item_id)
    return seen


def validate_folder_tree(folders: list[Folder]) -> None:
    """检查文件夹树：父文件夹必须存在，且不能成环."""
    parents = {folder.id: folder.parent_id for folder in folders}

    for folder_id, parent_id in parents.items():
        if parent_id is not None and parent_id not in parents:
            raise SeedDataError(f"文件夹 {folder_id} 的父文件夹 {parent_id} 不存在")

    for folder_id in parents:
        visited = {folder_id}
        current = parents[folder_id]
        while current is not None:
            if current in visited:
                raise SeedDataError(f"文件夹 {folder_id} 存在循环引用")
            visited.add(current)
            current = parents[current]


def validate_seed_data(data: SeedData) -> None:
    """校验数据集满足所有引用约束，任何悬空引用都会被拒绝."""
    folder_ids = _check_unique("folder", [f.id for f in data.folders])
    feed_ids = _check_unique("feed", [f.id for f in data.feeds])
    _check_unique("article", [a.id for a in data.articles])

    validate_folder_tree(data.folders)

    for feed in data.feeds:
        if feed.folder_id is not None and feed.folder_id not in folder_ids:
            raise SeedDataError(f"Feed {feed.id} 引用了不存在的文件夹 {feed.folder_id}")

    for article in data.articles:
        if article.feed_id not in feed_ids:
            raise SeedDataError(f"文章 {article.id} 引用了不存在的 Feed {article.feed_id}")


def default_seed_data() -> SeedData:
    """内置的初始数据集."""
    folders = [
        Folder(id="reader", name="Reader", position=0),
        Folder(id="tech", name="Tech", position=1),
        Folder(id="python", name="Python", parent_id="tech", position=2),
    ]

    feeds = [
        Feed(
            id="feed-reader-blog",
            title="Reader Blog",
            url="https://reader.example.com/rss.xml",
            site_url="https://reader.example.com",
            favicon="/reader-logo.png",
            folder_id="reader",
            position=0,
        ),
        Feed(
            id="feed-hacker-news",
            title="Hacker News",
            url="https://news.ycombinator.com/rss",
            site_url="https://news.ycombinator.com",
            folder_id="tech",
            position=1,
        ),
        Feed(
            id="feed-python-insider",
            title="Python Insider",
            url="https://blog.python.org/feeds/posts/default",
            site_url="https://blog.python.org",
            folder_id="python",
            position=2,
        ),
        Feed(
            id="feed-real-python",
            title="Real Python",
            url="https://realpython.com/atom.xml",
            site_url="https://realpython.com",
            folder_id="python",
            position=3,
        ),
        Feed(
            id="feed-xkcd",
            title="xkcd",
            url="https://xkcd.com/atom.xml",
            site_url="https://xkcd.com",
            position=4,
        ),
    ]

    # (id, feed_id, title, published_at, is_read, is_starred)
    rows = [
        ("article-welcome", "feed-reader-blog", "Welcome to Reader",
         datetime(2024, 1, 15, 9, 0, tzinfo=UTC), False, True),
        ("article-shortcuts", "feed-reader-blog", "Keyboard shortcuts",
         datetime(2024, 1, 16, 9, 0, tzinfo=UTC), False, False),
        ("article-hn-sqlite", "feed-hacker-news", "SQLite is not a toy database",
         datetime(2024, 1, 20, 14, 30, tzinfo=UTC), True, False),
        ("article-hn-rss", "feed-hacker-news", "RSS is still alive",
         datetime(2024, 1, 21, 8, 15, tzinfo=UTC), False, True),
        ("article-hn-async", "feed-hacker-news", "What color is your function",
         datetime(2024, 1, 22, 19, 45, tzinfo=UTC), False, False),
        ("article-py-312", "feed-python-insider", "Python 3.12.1 is now available",
         datetime(2023, 12, 8, 10, 0, tzinfo=UTC), True, False),
        ("article-py-313a", "feed-python-insider", "Python 3.13.0 alpha 3",
         datetime(2024, 1, 17, 11, 0, tzinfo=UTC), False, False),
        ("article-rp-asyncio", "feed-real-python", "Async IO in Python",
         datetime(2024, 1, 10, 12, 0, tzinfo=UTC), True, True),
        ("article-rp-typing", "feed-real-python", "Python type checking",
         datetime(2024, 1, 18, 12, 0, tzinfo=UTC), False, False),
        ("article-rp-pytest", "feed-real-python", "Effective Python testing with pytest",
         datetime(2024, 1, 19, 12, 0, tzinfo=UTC), False, False),
        ("article-xkcd-2879", "feed-xkcd", "Dependency",
         datetime(2024, 1, 12, 4, 0, tzinfo=UTC), True, False),
        ("article-xkcd-2880", "feed-xkcd", "Standards",
         datetime(2024, 1, 14, 4, 0, tzinfo=UTC), False, False),
    ]

    sites = {feed.id: feed.site_url for feed in feeds}
    articles = [
        Article(
            id=article_id,
            feed_id=feed_id,
            title=title,
            url=f"{sites[feed_id]}/{article_id.removeprefix('article-')}",
            preview=f"{title}.",
            content=f"<p>{title}</p>",
            published_at=published_at,
            is_read=is_read,
            is_starred=is_starred,
        )
        for article_id, feed_id, title, published_at, is_read, is_starred in rows
    ]

    return SeedData(folders=folders, feeds=feeds, articles=articles)


class Seeder:
    """把数据集写入空库.

    只应由访问网关调用。库中已有 Feed 时直接跳过，重复调用不会产生重复记录。
    """

    def __init__(self, data: SeedData | None = None) -> None:
        self._data = data

    def build(self) -> SeedData:
        """构建并校验本次要写入的数据."""
        data = self._data if self._data is not None else default_seed_data()
        validate_seed_data(data)
        return data

    async def run(self, session: AsyncSession) -> int:
        """写入初始数据，返回写入的文章数."""
        data = self.build()

        result = await session.execute(select(func.count()).select_from(Feed))
        if result.scalar_one() > 0:
            logger.info("数据库已有订阅源，跳过初始化数据")
            return 0

        logger.info(
            f"开始写入初始数据: folders={len(data.folders)}, "
            f"feeds={len(data.feeds)}, articles={len(data.articles)}"
        )

        try:
            # 父文件夹先于子文件夹写入
            for folder in sorted(data.folders, key=lambda f: _folder_depth(f, data.folders)):
                session.add(Folder(**folder.model_dump()))
            await session.flush()
            session.add_all([Feed(**feed.model_dump()) for feed in data.feeds])
            await session.flush()
            session.add_all([Article(**article.model_dump()) for article in data.articles])
            await session.commit()
        except Exception:
            await session.rollback()
            raise

        logger.info("初始数据写入完成")
        return len(data.articles)


def _folder_depth(folder: Folder, folders: list[Folder]) -> int:
    parents = {f.id: f.parent_id for f in folders}
    depth = 0
    current = folder.parent_id
    while current is not None:
        depth += 1
        current = parents.get(current)
    return depth
