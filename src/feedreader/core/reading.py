"""阅读数据的查询与状态修改.

这里的函数不经过访问网关，直接操作传入的会话；对外使用请走 ReadingService。
查询结果都是快照模型，修改快照不会影响存储。
"""

import logging

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from feedreader.exceptions import (
    ArticleNotFoundError,
    FeedNotFoundError,
    FolderNotFoundError,
)
from feedreader.models.article import Article, utcnow
from feedreader.models.feed import Feed
from feedreader.models.folder import Folder
from feedreader.models.schemas import (
    ArticleRead,
    FeedRead,
    FeedStats,
    FolderRead,
    ReadingData,
    Stats,
)

logger = logging.getLogger(__name__)


# ============================================================================
# 文件夹与订阅源
# ============================================================================


async def _unread_by_feed(session: AsyncSession) -> dict[str, int]:
    stmt = (
        select(Article.feed_id, func.count(Article.id))
        .where(Article.is_read == False)  # noqa: E712
        .group_by(Article.feed_id)
    )
    result = await session.execute(stmt)
    return {feed_id: count for feed_id, count in result.all()}


async def get_all_feeds(session: AsyncSession) -> list[FeedRead]:
    """获取全部订阅源（按创建顺序），附带未读数."""
    result = await session.execute(select(Feed).order_by(Feed.position, Feed.id))
    feeds = result.scalars().all()
    unread = await _unread_by_feed(session)

    return [
        FeedRead(**feed.model_dump(), unread_count=unread.get(feed.id, 0))
        for feed in feeds
    ]


async def get_all_folders(session: AsyncSession) -> list[FolderRead]:
    """获取全部文件夹（按创建顺序），附带直属订阅源和未读数."""
    result = await session.execute(select(Folder).order_by(Folder.position, Folder.id))
    folders = result.scalars().all()
    feeds = await get_all_feeds(session)

    items = []
    for folder in folders:
        members = [feed for feed in feeds if feed.folder_id == folder.id]
        items.append(
            FolderRead(
                **folder.model_dump(),
                feed_ids=[feed.id for feed in members],
                unread_count=sum(feed.unread_count for feed in members),
            )
        )
    return items


# ============================================================================
# 文章查询
# ============================================================================


def _article_query():
    return (
        select(Article, Feed.title)
        .join(Feed, Article.feed_id == Feed.id)
        .order_by(Article.published_at.desc(), Article.id)
    )


async def _list_articles(session: AsyncSession, stmt) -> list[ArticleRead]:
    result = await session.execute(stmt)
    return [
        ArticleRead(**article.model_dump(), feed_title=feed_title)
        for article, feed_title in result.all()
    ]


async def get_all_articles(session: AsyncSession) -> list[ArticleRead]:
    """获取全部文章，最新发布的在前."""
    return await _list_articles(session, _article_query())


async def get_unread_articles(session: AsyncSession) -> list[ArticleRead]:
    """获取未读文章."""
    stmt = _article_query().where(Article.is_read == False)  # noqa: E712
    return await _list_articles(session, stmt)


async def get_starred_articles(session: AsyncSession) -> list[ArticleRead]:
    """获取收藏文章."""
    stmt = _article_query().where(Article.is_starred == True)  # noqa: E712
    return await _list_articles(session, stmt)


async def get_articles_by_feed(session: AsyncSession, feed_id: str) -> list[ArticleRead]:
    """获取某个订阅源的文章."""
    if await session.get(Feed, feed_id) is None:
        raise FeedNotFoundError(feed_id)

    stmt = _article_query().where(Article.feed_id == feed_id)
    return await _list_articles(session, stmt)


async def get_articles_by_folder(
    session: AsyncSession, folder_id: str
) -> list[ArticleRead]:
    """获取直接位于某个文件夹下的订阅源的文章."""
    if await session.get(Folder, folder_id) is None:
        raise FolderNotFoundError(folder_id)

    stmt = _article_query().where(Feed.folder_id == folder_id)
    return await _list_articles(session, stmt)


async def get_article(session: AsyncSession, article_id: str) -> ArticleRead:
    """获取单篇文章."""
    stmt = _article_query().where(Article.id == article_id)
    articles = await _list_articles(session, stmt)
    if not articles:
        raise ArticleNotFoundError(article_id)
    return articles[0]


# ============================================================================
# 统计
# ============================================================================


async def get_stats(session: AsyncSession) -> Stats:
    """按当前文章状态计算统计，不做缓存."""
    stmt = select(
        Article.feed_id,
        func.count(Article.id),
        func.sum(case((Article.is_read == False, 1), else_=0)),  # noqa: E712
        func.sum(case((Article.is_starred == True, 1), else_=0)),  # noqa: E712
    ).group_by(Article.feed_id)
    result = await session.execute(stmt)
    counts = {
        feed_id: (total, int(unread or 0), int(starred or 0))
        for feed_id, total, unread, starred in result.all()
    }

    feed_result = await session.execute(
        select(Feed.id).order_by(Feed.position, Feed.id)
    )
    feed_stats = []
    for feed_id in feed_result.scalars().all():
        total, unread, starred = counts.get(feed_id, (0, 0, 0))
        feed_stats.append(
            FeedStats(feed_id=feed_id, total=total, unread=unread, starred=starred)
        )

    return Stats(
        total=sum(item.total for item in feed_stats),
        unread=sum(item.unread for item in feed_stats),
        starred=sum(item.starred for item in feed_stats),
        feeds=feed_stats,
    )


async def get_reading_data(session: AsyncSession) -> ReadingData:
    """一次性获取阅读界面需要的全部数据."""
    return ReadingData(
        folders=await get_all_folders(session),
        feeds=await get_all_feeds(session),
        articles=await get_all_articles(session),
        stats=await get_stats(session),
    )


# ============================================================================
# 状态修改
# ============================================================================


async def _get_article_or_raise(session: AsyncSession, article_id: str) -> Article:
    article = await session.get(Article, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    return article


async def update_article_read_status(
    session: AsyncSession, article_id: str, read: bool
) -> ArticleRead:
    """标记文章已读/未读（幂等）."""
    article = await _get_article_or_raise(session, article_id)

    if article.is_read != read:
        article.is_read = read
        article.updated_at = utcnow()
        await session.commit()
        logger.info(f"文章 {article_id} 已标记为{'已读' if read else '未读'}")

    return await get_article(session, article_id)


async def update_article_star_status(
    session: AsyncSession, article_id: str, starred: bool
) -> ArticleRead:
    """设置文章收藏状态（幂等）."""
    article = await _get_article_or_raise(session, article_id)

    if article.is_starred != starred:
        article.is_starred = starred
        article.updated_at = utcnow()
        await session.commit()
        logger.info(f"文章 {article_id} 已{'收藏' if starred else '取消收藏'}")

    return await get_article(session, article_id)


async def delete_article(session: AsyncSession, article_id: str) -> None:
    """永久删除文章；不存在（包括已删除）时抛出 ArticleNotFoundError."""
    article = await _get_article_or_raise(session, article_id)

    await session.delete(article)
    await session.commit()
    logger.info(f"文章 {article_id} 已删除")
