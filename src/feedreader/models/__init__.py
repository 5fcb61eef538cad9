"""数据模型."""

from feedreader.models.article import Article
from feedreader.models.database import get_session, init_db
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

__all__ = [
    "Article",
    "ArticleRead",
    "Feed",
    "FeedRead",
    "FeedStats",
    "Folder",
    "FolderRead",
    "ReadingData",
    "Stats",
    "get_session",
    "init_db",
]
